"""Bitmovin encoding API provider."""

from .client import NAME, BitmovinClient
from .presets import BitmovinPreset
from .provider import CAPABILITIES, BitmovinProvider, bitmovin_factory
from .translator import AACConfiguration, H264Configuration, H264Profile, translate_preset

__all__ = [
    "NAME",
    "BitmovinClient",
    "BitmovinPreset",
    "BitmovinProvider",
    "CAPABILITIES",
    "bitmovin_factory",
    "AACConfiguration",
    "H264Configuration",
    "H264Profile",
    "translate_preset",
]
