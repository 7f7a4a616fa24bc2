"""
Storage backend abstraction for file operations.

Provides capability interfaces and an S3 adapter over a shared object-store client.
"""

from objectfs.storage.adapter import (
    ListKeysAware,
    MetadataSupporter,
    MimeTypeProvider,
    SizeCalculator,
    StorageAdapter,
)
from objectfs.storage.backend import BackendError, Boto3ObjectStore, ObjectStoreClient
from objectfs.storage.errors import (
    ConfigurationError,
    FileNotFound,
    StorageError,
    StorageFailure,
)
from objectfs.storage.factory import get_storage_adapter, reset_storage_adapter
from objectfs.storage.s3 import AwsS3Adapter, S3AdapterOptions

__all__ = [
    "StorageAdapter",
    "MetadataSupporter",
    "ListKeysAware",
    "SizeCalculator",
    "MimeTypeProvider",
    "ObjectStoreClient",
    "Boto3ObjectStore",
    "BackendError",
    "StorageError",
    "FileNotFound",
    "StorageFailure",
    "ConfigurationError",
    "AwsS3Adapter",
    "S3AdapterOptions",
    "get_storage_adapter",
    "reset_storage_adapter",
]
