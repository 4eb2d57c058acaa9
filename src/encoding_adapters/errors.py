"""Errors raised by encoding adapters.

Every adapter failure is a ``ProviderError`` carrying an ``ErrorKind`` and a
free-text detail. Network failures are httpx's own ``TransportError`` and are
re-exported here unchanged so callers can catch both from one place.
"""

from __future__ import annotations

from enum import Enum

from httpx import TransportError


class ErrorKind(str, Enum):
    """Semantic category of an adapter failure."""

    INVALID_CONFIG = "invalid_config"
    UNSUPPORTED_CODEC = "unsupported_codec"
    UNSUPPORTED_PROFILE = "unsupported_profile"
    UNSUPPORTED_LEVEL = "unsupported_level"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_NUMERIC_FIELD = "invalid_numeric_field"
    UNRESOLVABLE_REGION = "unresolvable_region"
    MISSING_AUDIO_REFERENCE = "missing_audio_reference"
    DUPLICATE_OUTPUT = "duplicate_output"
    REMOTE_SERVICE = "remote_service"
    PROVIDER_NOT_FOUND = "provider_not_found"
    PROVIDER_ALREADY_REGISTERED = "provider_already_registered"


class ProviderError(Exception):
    """Base class for adapter errors."""

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, detail: str):
        super().__init__(detail)
        self.kind = kind
        self.detail = detail


class InvalidConfigError(ProviderError):
    """The adapter cannot be built from the given settings."""

    def __init__(self, detail: str):
        super().__init__(ErrorKind.INVALID_CONFIG, detail)


class UnsupportedCodecError(ProviderError):
    def __init__(self, codec_kind: str, value: str):
        super().__init__(ErrorKind.UNSUPPORTED_CODEC, f"Unsupported {codec_kind} codec: {value!r}")
        self.codec_kind = codec_kind
        self.value = value


class UnsupportedProfileError(ProviderError):
    def __init__(self, value: str):
        super().__init__(ErrorKind.UNSUPPORTED_PROFILE, f"Unrecognized H264 profile: {value!r}")
        self.value = value


class UnsupportedLevelError(ProviderError):
    def __init__(self, value: str):
        super().__init__(ErrorKind.UNSUPPORTED_LEVEL, f"Unrecognized H264 level: {value!r}")
        self.value = value


class MissingRequiredFieldError(ProviderError):
    def __init__(self, field: str):
        super().__init__(ErrorKind.MISSING_REQUIRED_FIELD, f"{field} must be set")
        self.field = field


class InvalidNumericFieldError(ProviderError):
    def __init__(self, field: str, value: str):
        super().__init__(ErrorKind.INVALID_NUMERIC_FIELD, f"{field} is not an integer: {value!r}")
        self.field = field
        self.value = value


class UnresolvableRegionError(ProviderError):
    def __init__(self, host: str):
        super().__init__(ErrorKind.UNRESOLVABLE_REGION, f"Unable to determine AWS region from host: {host!r}")
        self.host = host


class MissingAudioReferenceError(ProviderError):
    """A video configuration has no usable link to its audio configuration."""

    def __init__(self, preset_id: str, detail: str):
        super().__init__(ErrorKind.MISSING_AUDIO_REFERENCE, f"Preset {preset_id}: {detail}")
        self.preset_id = preset_id


class DuplicateOutputError(ProviderError):
    """Two outputs of one job write the same file."""

    def __init__(self, file_name: str):
        super().__init__(ErrorKind.DUPLICATE_OUTPUT, f"Output file name used more than once: {file_name!r}")
        self.file_name = file_name


class RemoteServiceError(ProviderError):
    """The remote service answered a well-formed request with a failure."""

    def __init__(self, operation: str, message: str, status_code: int | None = None):
        super().__init__(ErrorKind.REMOTE_SERVICE, f"{operation} failed: {message}")
        self.operation = operation
        self.message = message
        self.status_code = status_code


class ProviderNotFoundError(ProviderError):
    def __init__(self, name: str):
        super().__init__(ErrorKind.PROVIDER_NOT_FOUND, f"Provider {name!r} is not registered")
        self.name = name


class ProviderAlreadyRegisteredError(ProviderError):
    def __init__(self, name: str):
        super().__init__(ErrorKind.PROVIDER_ALREADY_REGISTERED, f"Provider {name!r} is already registered")
        self.name = name


__all__ = [
    "ErrorKind",
    "ProviderError",
    "InvalidConfigError",
    "UnsupportedCodecError",
    "UnsupportedProfileError",
    "UnsupportedLevelError",
    "MissingRequiredFieldError",
    "InvalidNumericFieldError",
    "UnresolvableRegionError",
    "MissingAudioReferenceError",
    "DuplicateOutputError",
    "RemoteServiceError",
    "ProviderNotFoundError",
    "ProviderAlreadyRegisteredError",
    "TransportError",
]
