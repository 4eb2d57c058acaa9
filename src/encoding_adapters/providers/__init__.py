"""Remote encoding service providers."""

from .base import TranscodingProvider

__all__ = [
    "TranscodingProvider",
]
