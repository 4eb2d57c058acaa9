"""Adapters that submit presets and encode jobs to remote encoding services."""

from .errors import ErrorKind, ProviderError
from .registry import build_provider, get_provider_factory, list_providers, register
from .storage import resolve_storage_location
from .types import (
    AudioPreset,
    Capabilities,
    Job,
    JobStatus,
    Preset,
    Status,
    StorageLocation,
    StreamingParams,
    TranscodeOutput,
    VideoPreset,
)

# Importing a provider package registers it.
from .providers import bitmovin  # noqa: E402,F401

__all__ = [
    "ErrorKind",
    "ProviderError",
    "build_provider",
    "get_provider_factory",
    "list_providers",
    "register",
    "resolve_storage_location",
    "AudioPreset",
    "Capabilities",
    "Job",
    "JobStatus",
    "Preset",
    "Status",
    "StorageLocation",
    "StreamingParams",
    "TranscodeOutput",
    "VideoPreset",
]
