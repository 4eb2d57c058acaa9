"""Bitmovin presets: an H264 configuration linked to a shared AAC configuration.

A preset handle is the id of the H264 configuration. The id of its AAC
configuration is stored in the H264 configuration's ``customData`` under the
single reserved key ``"audio"``. Deleting a preset only deletes the H264
configuration; AAC configurations are shared and never deleted here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ...errors import MissingAudioReferenceError
from ...types import Preset
from .audio import find_or_create_audio_config, get_audio_config
from .client import BitmovinClient
from .translator import AACConfiguration, H264Configuration, parse_audio_bitrate, translate_preset

logger = logging.getLogger(__name__)

H264_CONFIGURATIONS_PATH = "encoding/configurations/video/h264"
AUDIO_REFERENCE_KEY = "audio"


@dataclass
class BitmovinPreset:
    """A registered preset: the video configuration and its linked audio configuration."""

    video: H264Configuration
    audio: AACConfiguration


def create_preset(client: BitmovinClient, preset: Preset) -> str:
    """
    Register a preset and return its handle.

    The preset is fully translated and validated before anything is sent, so
    an invalid preset never leaves a remote resource behind.
    """
    video_config = translate_preset(preset)
    audio_bitrate = parse_audio_bitrate(preset)

    audio_config_id = find_or_create_audio_config(client, audio_bitrate)
    video_config.custom_data = {AUDIO_REFERENCE_KEY: audio_config_id}

    preset_id = client.create("create_video_config", H264_CONFIGURATIONS_PATH, video_config.to_payload())
    logger.info(f"Created preset {preset.name!r} as H264 configuration {preset_id} (audio {audio_config_id})")
    return preset_id


def _audio_reference(client: BitmovinClient, preset_id: str, video_config: H264Configuration) -> str:
    custom_data: dict[str, Any] = video_config.custom_data
    if AUDIO_REFERENCE_KEY not in custom_data:
        # Resource bodies may omit custom data; it has its own endpoint.
        result = client.get("get_video_config_custom_data", f"{H264_CONFIGURATIONS_PATH}/{preset_id}/customData")
        custom_data = result.get("customData") or {}

    if AUDIO_REFERENCE_KEY not in custom_data:
        raise MissingAudioReferenceError(preset_id, "no audio configuration linked to the video configuration")
    audio_config_id = custom_data[AUDIO_REFERENCE_KEY]
    if not isinstance(audio_config_id, str) or not audio_config_id:
        raise MissingAudioReferenceError(
            preset_id, f"audio configuration reference is not a string: {audio_config_id!r}"
        )
    return audio_config_id


def get_preset(client: BitmovinClient, preset_id: str) -> BitmovinPreset:
    result = client.get("get_video_config", f"{H264_CONFIGURATIONS_PATH}/{preset_id}")
    video_config = H264Configuration.from_payload(result)
    audio_config_id = _audio_reference(client, preset_id, video_config)
    video_config.custom_data = {**video_config.custom_data, AUDIO_REFERENCE_KEY: audio_config_id}
    return BitmovinPreset(video=video_config, audio=get_audio_config(client, audio_config_id))


def delete_preset(client: BitmovinClient, preset_id: str) -> None:
    # The linked AAC configuration stays for reuse by other presets.
    client.delete("delete_video_config", f"{H264_CONFIGURATIONS_PATH}/{preset_id}")
    logger.info(f"Deleted preset {preset_id}")
