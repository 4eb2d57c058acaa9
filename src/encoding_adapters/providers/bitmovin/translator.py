"""Translation of generic presets into Bitmovin codec configurations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ...errors import (
    InvalidNumericFieldError,
    MissingRequiredFieldError,
    UnsupportedCodecError,
    UnsupportedLevelError,
    UnsupportedProfileError,
)
from ...types import Preset

SUPPORTED_VIDEO_CODECS = {"h264"}
SUPPORTED_AUDIO_CODECS = {"aac"}

AAC_SAMPLING_RATE = 48000.0

# Optional sign and ASCII digits only.
_INTEGER = re.compile(r"[+-]?[0-9]+")


class H264Profile(str, Enum):
    """H264 profiles accepted by Bitmovin."""

    BASELINE = "BASELINE"
    MAIN = "MAIN"
    HIGH = "HIGH"


_PROFILES = {
    "high": H264Profile.HIGH,
    "main": H264Profile.MAIN,
    "baseline": H264Profile.BASELINE,
    "": H264Profile.MAIN,
}

# Level ids are not plain numbers ("1b"), so they are matched, never parsed.
H264_LEVELS = [
    "1",
    "1b",
    "1.1",
    "1.2",
    "1.3",
    "2",
    "2.1",
    "2.2",
    "3",
    "3.1",
    "3.2",
    "4",
    "4.1",
    "4.2",
    "5",
    "5.1",
    "5.2",
]


@dataclass
class H264Configuration:
    """Bitmovin H264 video codec configuration."""

    name: str
    bitrate: int
    profile: H264Profile = H264Profile.MAIN
    level: str | None = None
    width: int | None = None  # None = let Bitmovin keep the input geometry
    height: int | None = None
    max_gop: int | None = None
    description: str = ""
    id: str | None = None
    custom_data: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Convert to the request body of POST /encoding/configurations/video/h264."""
        payload: dict[str, Any] = {
            "name": self.name,
            "bitrate": self.bitrate,
            "profile": self.profile.value,
        }
        if self.description:
            payload["description"] = self.description
        if self.level:
            payload["level"] = self.level
        if self.width is not None:
            payload["width"] = self.width
        if self.height is not None:
            payload["height"] = self.height
        if self.max_gop is not None:
            payload["maxGop"] = self.max_gop
        if self.custom_data:
            payload["customData"] = self.custom_data
        return payload

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> H264Configuration:
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            description=data.get("description", ""),
            bitrate=data.get("bitrate", 0),
            profile=H264Profile(data.get("profile", H264Profile.MAIN.value)),
            level=data.get("level"),
            width=data.get("width"),
            height=data.get("height"),
            max_gop=data.get("maxGop"),
            custom_data=data.get("customData") or {},
        )


@dataclass
class AACConfiguration:
    """Bitmovin AAC audio codec configuration."""

    name: str
    bitrate: int
    rate: float = AAC_SAMPLING_RATE
    id: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "bitrate": self.bitrate, "rate": self.rate}

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> AACConfiguration:
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            bitrate=data.get("bitrate", 0),
            rate=data.get("rate", AAC_SAMPLING_RATE),
        )


def _parse_int(field_name: str, value: str) -> int | None:
    """Parse an optional string-typed numeric field; "" means unset."""
    if value == "":
        return None
    if not _INTEGER.fullmatch(value):
        raise InvalidNumericFieldError(field_name, value)
    return int(value)


def _require_int(field_name: str, value: str) -> int:
    parsed = _parse_int(field_name, value)
    if parsed is None:
        raise MissingRequiredFieldError(field_name)
    return parsed


def check_codecs(preset: Preset) -> None:
    """Raise UnsupportedCodecError unless the preset is H264 video with AAC audio."""
    if preset.audio.codec.lower() not in SUPPORTED_AUDIO_CODECS:
        raise UnsupportedCodecError("audio", preset.audio.codec)
    if preset.video.codec.lower() not in SUPPORTED_VIDEO_CODECS:
        raise UnsupportedCodecError("video", preset.video.codec)


def parse_audio_bitrate(preset: Preset) -> int:
    return _require_int("audio.bitrate", preset.audio.bitrate)


def translate_preset(preset: Preset) -> H264Configuration:
    """
    Build the H264 configuration for a preset.

    Pure function of the preset's fields; nothing is sent to Bitmovin.

    Raises:
        UnsupportedCodecError: Audio codec is not AAC or video codec is not H264
        UnsupportedProfileError: Profile is not high, main, baseline or empty
        UnsupportedLevelError: Level is not an exact entry of H264_LEVELS
        MissingRequiredFieldError: Video bitrate is empty
        InvalidNumericFieldError: A numeric field does not parse
    """
    check_codecs(preset)
    video = preset.video

    profile = _PROFILES.get(video.profile.lower())
    if profile is None:
        raise UnsupportedProfileError(video.profile)

    level = next((lvl for lvl in H264_LEVELS if lvl == video.profile_level), None)
    if level is None:
        raise UnsupportedLevelError(video.profile_level)

    bitrate = _require_int("video.bitrate", video.bitrate)

    return H264Configuration(
        name=preset.name,
        description=preset.description,
        bitrate=bitrate,
        profile=profile,
        level=level,
        width=_parse_int("video.width", video.width),
        height=_parse_int("video.height", video.height),
        max_gop=_parse_int("video.gop_size", video.gop_size),
    )
