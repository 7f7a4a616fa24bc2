"""
Storage factory for creating storage adapter instances.

Provides singleton access to the S3 adapter based on configuration.
"""

from functools import lru_cache

import boto3

from objectfs.config.settings import get_settings
from objectfs.storage.s3 import AwsS3Adapter, S3AdapterOptions


@lru_cache()
def get_storage_adapter() -> AwsS3Adapter:
    """
    Get or create the storage adapter instance.

    Returns:
        AwsS3Adapter configured from settings

    Raises:
        ValueError: If no bucket is configured
    """
    settings = get_settings()
    if not settings.s3_bucket:
        raise ValueError("S3_BUCKET is not configured")

    client = boto3.client(
        "s3",
        region_name=settings.aws_region,
        endpoint_url=settings.s3_endpoint_url,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
    )
    options = S3AdapterOptions(
        create=settings.storage_create_bucket,
        directory=settings.storage_directory,
        acl=settings.storage_acl,
    )
    return AwsS3Adapter(
        client,
        settings.s3_bucket,
        options,
        detect_content_type=settings.storage_detect_content_type,
    )


def reset_storage_adapter() -> None:
    """Reset the storage adapter instance (useful for testing)."""
    get_storage_adapter.cache_clear()
