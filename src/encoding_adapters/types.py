"""Provider-agnostic type definitions shared by every adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Status(str, Enum):
    """Canonical job status."""

    QUEUED = "queued"
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"
    CANCELED = "canceled"
    UNKNOWN = "unknown"


class AWSCloudRegion(str, Enum):
    """AWS regions as identified by the Bitmovin API."""

    US_EAST_1 = "US_EAST_1"
    US_WEST_1 = "US_WEST_1"
    US_WEST_2 = "US_WEST_2"
    AP_SOUTH_1 = "AP_SOUTH_1"
    AP_NORTHEAST_1 = "AP_NORTHEAST_1"
    AP_NORTHEAST_2 = "AP_NORTHEAST_2"
    AP_SOUTHEAST_1 = "AP_SOUTHEAST_1"
    AP_SOUTHEAST_2 = "AP_SOUTHEAST_2"
    EU_CENTRAL_1 = "EU_CENTRAL_1"
    EU_WEST_1 = "EU_WEST_1"
    SA_EAST_1 = "SA_EAST_1"


def _text(value: Any) -> str:
    """String form of a JSON field; a missing or null field is unset ("")."""
    return "" if value is None else str(value)


@dataclass(frozen=True)
class VideoPreset:
    """Video settings of a preset. Numeric fields are strings; "" means unset."""

    codec: str = ""
    profile: str = ""
    profile_level: str = ""
    width: str = ""
    height: str = ""
    bitrate: str = ""
    gop_size: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VideoPreset:
        return cls(
            codec=_text(data.get("codec")),
            profile=_text(data.get("profile")),
            profile_level=_text(data.get("profileLevel", data.get("profile_level"))),
            width=_text(data.get("width")),
            height=_text(data.get("height")),
            bitrate=_text(data.get("bitrate")),
            gop_size=_text(data.get("gopSize", data.get("gop_size"))),
        )


@dataclass(frozen=True)
class AudioPreset:
    """Audio settings of a preset."""

    codec: str = ""
    bitrate: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AudioPreset:
        return cls(
            codec=_text(data.get("codec")),
            bitrate=_text(data.get("bitrate")),
        )


@dataclass(frozen=True)
class Preset:
    """A vendor-agnostic, reusable encode configuration."""

    name: str
    video: VideoPreset
    audio: AudioPreset
    description: str = ""
    container: str = "mp4"
    rate_control: str = ""
    two_pass: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Preset:
        """Create from the orchestrator's camelCase JSON."""
        return cls(
            name=data["name"],
            video=VideoPreset.from_dict(data.get("video") or {}),
            audio=AudioPreset.from_dict(data.get("audio") or {}),
            description=data.get("description", ""),
            container=data.get("container", "mp4"),
            rate_control=data.get("rateControl", data.get("rate_control", "")),
            two_pass=bool(data.get("twoPass", data.get("two_pass", False))),
        )


@dataclass(frozen=True)
class StorageLocation:
    """An object in S3, addressed the way Bitmovin inputs and outputs expect."""

    file_name: str
    bucket_name: str
    region: AWSCloudRegion


@dataclass(frozen=True)
class TranscodeOutput:
    """One rendition of a job: a registered preset written to a file."""

    preset_id: str
    file_name: str


@dataclass(frozen=True)
class StreamingParams:
    """Adaptive streaming settings. An empty protocol means progressive outputs."""

    protocol: str = ""
    segment_duration: int = 0
    playlist_file_name: str = "master.m3u8"


@dataclass
class Job:
    """A transcode job as handed over by the orchestrator."""

    id: str
    source_media: str
    outputs: list[TranscodeOutput] = field(default_factory=list)
    streaming_params: StreamingParams = field(default_factory=StreamingParams)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Job:
        """Create from the orchestrator's camelCase JSON."""
        params = data.get("streamingParams") or {}
        return cls(
            id=data["id"],
            source_media=data["sourceMedia"],
            outputs=[
                TranscodeOutput(preset_id=output["presetId"], file_name=output["fileName"])
                for output in data.get("outputs", [])
            ],
            streaming_params=StreamingParams(
                protocol=params.get("protocol", ""),
                segment_duration=int(params.get("segmentDuration") or 0),
                playlist_file_name=params.get("playlistFileName") or "master.m3u8",
            ),
        )

    @property
    def is_hls(self) -> bool:
        return self.streaming_params.protocol.lower() == "hls"


@dataclass
class JobStatus:
    """Canonical status of a remote job."""

    provider_name: str
    provider_job_id: str
    status: Status
    progress: float | None = None
    status_message: str = ""
    provider_status: dict[str, Any] = field(default_factory=dict)
    output_destination: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "providerName": self.provider_name,
            "providerJobId": self.provider_job_id,
            "status": self.status.value,
            "progress": self.progress,
            "statusMessage": self.status_message,
            "providerStatus": self.provider_status,
            "outputDestination": self.output_destination,
        }


@dataclass(frozen=True)
class Capabilities:
    """Formats and destinations an adapter can handle."""

    input_formats: frozenset[str] = frozenset()
    output_formats: frozenset[str] = frozenset()
    destinations: frozenset[str] = frozenset()
