"""Reuse of shared AAC configurations across presets."""

from __future__ import annotations

import logging

from .client import BitmovinClient
from .translator import AACConfiguration

logger = logging.getLogger(__name__)

AAC_CONFIGURATIONS_PATH = "encoding/configurations/audio/aac"


def list_audio_configs(client: BitmovinClient) -> list[AACConfiguration]:
    items = client.list_all("list_audio_configs", AAC_CONFIGURATIONS_PATH)
    return [AACConfiguration.from_payload(item) for item in items]


def find_or_create_audio_config(client: BitmovinClient, bitrate: int) -> str:
    """
    Return the id of an AAC configuration with exactly this bitrate.

    An existing configuration is reused when one matches; otherwise a new
    48 kHz configuration is created. The lookup and the creation are separate
    remote calls, so two concurrent callers can both miss and both create.
    The duplicates are harmless and are left in place.
    """
    for config in list_audio_configs(client):
        if config.bitrate == bitrate and config.id:
            logger.debug(f"Reusing AAC configuration {config.id} for {bitrate} bps")
            return config.id

    config = AACConfiguration(name=f"aac_{bitrate}", bitrate=bitrate)
    audio_config_id = client.create("create_audio_config", AAC_CONFIGURATIONS_PATH, config.to_payload())
    logger.info(f"Created AAC configuration {audio_config_id} for {bitrate} bps")
    return audio_config_id


def get_audio_config(client: BitmovinClient, audio_config_id: str) -> AACConfiguration:
    result = client.get("get_audio_config", f"{AAC_CONFIGURATIONS_PATH}/{audio_config_id}")
    return AACConfiguration.from_payload(result)
