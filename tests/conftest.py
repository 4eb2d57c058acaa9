"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from encoding_adapters.config import Settings
from encoding_adapters.providers.bitmovin import BitmovinClient, bitmovin_factory
from encoding_adapters.types import AudioPreset, Preset, VideoPreset
from tests.helpers import ENDPOINT, FakeBitmovin


@pytest.fixture
def settings():
    """Settings pointing at the fake Bitmovin API."""
    return Settings(
        BITMOVIN_API_KEY="test-api-key",
        BITMOVIN_ENDPOINT=ENDPOINT,
        BITMOVIN_AWS_ACCESS_KEY_ID="AKIATEST",
        BITMOVIN_AWS_SECRET_ACCESS_KEY="secret",
        BITMOVIN_DESTINATION="https://s3.amazonaws.com/output-bucket/encodes/",
        MANIFEST_POLL_INTERVAL_SECONDS=0,
        MANIFEST_WAIT_TIMEOUT_SECONDS=5,
    )


@pytest.fixture
def fake_bitmovin():
    return FakeBitmovin()


@pytest.fixture
def client(fake_bitmovin):
    with BitmovinClient("test-api-key", endpoint=ENDPOINT, transport=fake_bitmovin.transport) as client:
        yield client


@pytest.fixture
def provider(settings, fake_bitmovin):
    provider = bitmovin_factory(settings, transport=fake_bitmovin.transport)
    yield provider
    provider.close()


@pytest.fixture
def sample_preset():
    """A valid 720p H264/AAC preset."""
    return Preset(
        name="720p",
        description="720p high profile",
        video=VideoPreset(
            codec="h264",
            profile="high",
            profile_level="3.1",
            width="1280",
            height="720",
            bitrate="3500000",
            gop_size="90",
        ),
        audio=AudioPreset(codec="aac", bitrate="128000"),
    )
