"""S3 URL parsing for provider inputs and outputs."""

from __future__ import annotations

from urllib.parse import urlparse

from ..errors import UnresolvableRegionError
from ..types import AWSCloudRegion, StorageLocation

# Known S3 endpoints, including legacy dash-style and dual-stack hosts.
S3_HOST_REGIONS: dict[str, AWSCloudRegion] = {
    "s3.amazonaws.com": AWSCloudRegion.US_EAST_1,
    "s3-external-1.amazonaws.com": AWSCloudRegion.US_EAST_1,
    "s3.dualstack.us-east-1.amazonaws.com": AWSCloudRegion.US_EAST_1,
    "s3-us-west-1.amazonaws.com": AWSCloudRegion.US_WEST_1,
    "s3.dualstack.us-west-1.amazonaws.com": AWSCloudRegion.US_WEST_1,
    "s3-us-west-2.amazonaws.com": AWSCloudRegion.US_WEST_2,
    "s3.dualstack.us-west-2.amazonaws.com": AWSCloudRegion.US_WEST_2,
    "s3.ap-south-1.amazonaws.com": AWSCloudRegion.AP_SOUTH_1,
    "s3-ap-south-1.amazonaws.com": AWSCloudRegion.AP_SOUTH_1,
    "s3.dualstack.ap-south-1.amazonaws.com": AWSCloudRegion.AP_SOUTH_1,
    "s3.ap-northeast-2.amazonaws.com": AWSCloudRegion.AP_NORTHEAST_2,
    "s3-ap-northeast-2.amazonaws.com": AWSCloudRegion.AP_NORTHEAST_2,
    "s3.dualstack.ap-northeast-2.amazonaws.com": AWSCloudRegion.AP_NORTHEAST_2,
    "s3-ap-southeast-1.amazonaws.com": AWSCloudRegion.AP_SOUTHEAST_1,
    "s3.dualstack.ap-southeast-1.amazonaws.com": AWSCloudRegion.AP_SOUTHEAST_1,
    "s3-ap-southeast-2.amazonaws.com": AWSCloudRegion.AP_SOUTHEAST_2,
    "s3.dualstack.ap-southeast-2.amazonaws.com": AWSCloudRegion.AP_SOUTHEAST_2,
    "s3-ap-northeast-1.amazonaws.com": AWSCloudRegion.AP_NORTHEAST_1,
    "s3.dualstack.ap-northeast-1.amazonaws.com": AWSCloudRegion.AP_NORTHEAST_1,
    "s3.eu-central-1.amazonaws.com": AWSCloudRegion.EU_CENTRAL_1,
    "s3-eu-central-1.amazonaws.com": AWSCloudRegion.EU_CENTRAL_1,
    "s3.dualstack.eu-central-1.amazonaws.com": AWSCloudRegion.EU_CENTRAL_1,
    "s3-eu-west-1.amazonaws.com": AWSCloudRegion.EU_WEST_1,
    "s3.dualstack.eu-west-1.amazonaws.com": AWSCloudRegion.EU_WEST_1,
    "s3-sa-east-1.amazonaws.com": AWSCloudRegion.SA_EAST_1,
    "s3.dualstack.sa-east-1.amazonaws.com": AWSCloudRegion.SA_EAST_1,
}


def resolve_storage_location(url: str) -> StorageLocation:
    """
    Split an S3 URL into file name, bucket name and region.

    The bucket name keeps any intermediate path segments, so
    ``https://s3-us-west-2.amazonaws.com/mybucket/path/video.mp4`` resolves to
    file ``video.mp4`` in bucket ``mybucket/path`` in ``US_WEST_2``. A URL with
    a trailing slash resolves to an empty file name, which is how output
    prefixes are addressed.

    Raises:
        UnresolvableRegionError: If the host is not a known S3 endpoint.
    """
    parsed = urlparse(url)
    region = S3_HOST_REGIONS.get(parsed.netloc)
    if region is None:
        raise UnresolvableRegionError(parsed.netloc)

    path = parsed.path
    file_name = path.rsplit("/", 1)[-1]
    bucket_name = path[: len(path) - len(file_name)].strip("/")
    return StorageLocation(file_name=file_name, bucket_name=bucket_name, region=region)
