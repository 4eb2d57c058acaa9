"""Bitmovin implementation of the transcoding provider contract."""

from __future__ import annotations

import httpx

from ...config import Settings
from ...errors import InvalidConfigError
from ...registry import register
from ...types import Capabilities, Job, JobStatus, Preset
from ..base import TranscodingProvider
from . import jobs, presets
from .client import NAME, BitmovinClient
from .presets import BitmovinPreset

CAPABILITIES = Capabilities(
    input_formats=frozenset({"prores", "h264"}),
    output_formats=frozenset({"mp4", "hls"}),
    destinations=frozenset({"s3"}),
)


class BitmovinProvider(TranscodingProvider):
    """Presets and jobs on the Bitmovin encoding API."""

    def __init__(self, client: BitmovinClient, settings: Settings) -> None:
        super().__init__(NAME)
        self.client = client
        self.settings = settings

    def capabilities(self) -> Capabilities:
        return CAPABILITIES

    def create_preset(self, preset: Preset) -> str:
        return presets.create_preset(self.client, preset)

    def get_preset(self, preset_id: str) -> BitmovinPreset:
        return presets.get_preset(self.client, preset_id)

    def delete_preset(self, preset_id: str) -> None:
        presets.delete_preset(self.client, preset_id)

    def transcode(self, job: Job) -> str:
        return jobs.transcode(self.client, self.settings, job)

    def job_status(self, provider_job_id: str) -> JobStatus:
        return jobs.job_status(self.client, self.settings, provider_job_id)

    def cancel_job(self, provider_job_id: str) -> None:
        jobs.cancel_job(self.client, provider_job_id)

    def healthcheck(self) -> None:
        jobs.healthcheck(self.client)

    def close(self) -> None:
        self.client.close()


def bitmovin_factory(settings: Settings, transport: httpx.BaseTransport | None = None) -> BitmovinProvider:
    """Build a Bitmovin provider from settings."""
    if not settings.bitmovin_api_key:
        raise InvalidConfigError(
            "missing Bitmovin api key. Please define the environment variable BITMOVIN_API_KEY"
        )
    client = BitmovinClient(
        settings.bitmovin_api_key,
        endpoint=settings.bitmovin_endpoint,
        timeout=settings.bitmovin_timeout,
        transport=transport,
    )
    return BitmovinProvider(client, settings)


register(NAME, bitmovin_factory)
