"""Object storage addressing for provider inputs and outputs."""

from .s3 import S3_HOST_REGIONS, resolve_storage_location

__all__ = [
    "S3_HOST_REGIONS",
    "resolve_storage_location",
]
