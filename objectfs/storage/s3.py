"""
Amazon S3 storage adapter.

Stores every key as an object in a single bucket, optionally below a
virtual directory:
- s3://{bucket}/{key}              without a directory
- s3://{bucket}/{directory}/{key}  with a directory

The bucket is checked (and, if allowed, created) lazily on the first read,
write, rename or listing. Backend failures are translated into the
FileNotFound / StorageFailure / ConfigurationError taxonomy.
"""

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Union

from dateutil import parser as date_parser

from objectfs.common.logging_config import PerformanceTracker
from objectfs.common.metrics import buckets_created_total, record_storage_operation
from objectfs.storage.adapter import (
    Content,
    ListKeysAware,
    MetadataSupporter,
    MimeTypeProvider,
    SizeCalculator,
    StorageAdapter,
)
from objectfs.storage.backend import BackendError, Boto3ObjectStore, ObjectStoreClient
from objectfs.storage.content_type import guess_content_type
from objectfs.storage.errors import (
    ConfigurationError,
    FileNotFound,
    StorageError,
    StorageFailure,
)
from objectfs.storage.paths import PathTranslator

logger = logging.getLogger(__name__)


@dataclass
class S3AdapterOptions:
    """Adapter-wide settings."""
    create: bool = False  # create the bucket when it is missing
    directory: str = ""  # virtual directory all keys live under
    acl: str = "private"
    defaults: Dict[str, Any] = field(default_factory=dict)  # extra request fields

    def __post_init__(self):
        self.directory = self.directory.rstrip("/")


class AwsS3Adapter(StorageAdapter, MetadataSupporter, ListKeysAware, SizeCalculator, MimeTypeProvider):
    """
    S3-backed storage adapter.

    The object-store client is shared with the caller and never closed here.
    The metadata overlay and the bucket flag are guarded by locks so one
    adapter can be used from several threads.
    """

    def __init__(
        self,
        service: Union[ObjectStoreClient, Any],
        bucket: str,
        options: Optional[Union[S3AdapterOptions, Dict[str, Any]]] = None,
        detect_content_type: bool = False,
    ):
        """
        Initialize the adapter.

        Args:
            service: ObjectStoreClient, or a boto3 S3 client to wrap
            bucket: Bucket name
            options: S3AdapterOptions or a dict of its fields
            detect_content_type: Sniff the content type of written content
                when none was set through metadata
        """
        if not isinstance(service, ObjectStoreClient):
            service = Boto3ObjectStore(service)
        if isinstance(options, dict):
            options = S3AdapterOptions(**options)

        self.service = service
        self._bucket = bucket
        self.options = options or S3AdapterOptions()
        self.detect_content_type = detect_content_type
        self.paths = PathTranslator(self.options.directory)

        self._bucket_exists = False
        self._bucket_lock = threading.Lock()
        self._metadata: Dict[str, Dict[str, Any]] = {}
        self._metadata_lock = threading.Lock()

    @property
    def bucket(self) -> str:
        return self._bucket

    # Metadata overlay

    def set_metadata(self, key: str, metadata: Dict[str, Any]) -> None:
        """
        Set request fields merged into every request for a key.

        Replaces any previous metadata of the key.
        """
        metadata = dict(metadata)
        # Legacy spelling
        if "contentType" in metadata:
            metadata["ContentType"] = metadata.pop("contentType")

        with self._metadata_lock:
            self._metadata[key] = metadata

    def get_metadata(self, key: str) -> Dict[str, Any]:
        with self._metadata_lock:
            return dict(self._metadata.get(key, {}))

    # StorageAdapter interface

    def read(self, key: str) -> bytes:
        self.ensure_bucket_exists()
        options = self.get_options(key)

        with self._backend_call("read", {"key": key}, not_found_key=key):
            result = self.service.get_object(options)
            body = result.get("Body", b"")
            content = body.read() if hasattr(body, "read") else body

        # Make the remote content type available locally
        content_type = result.get("ContentType")
        if content_type:
            with self._metadata_lock:
                self._metadata.setdefault(key, {})["ContentType"] = content_type

        return bytes(content)

    def write(self, key: str, content: Content) -> None:
        self.ensure_bucket_exists()
        options = self.get_options(key, {"Body": content})

        # Without a content type everything would be served as binary/octet-stream
        if not options.get("ContentType") and self.detect_content_type:
            content_type = guess_content_type(content)
            if content_type:
                options["ContentType"] = content_type

        with self._backend_call("write", {"key": key, "content": content}):
            self.service.put_object(options)

    def rename(self, source_key: str, target_key: str) -> None:
        """
        Copy the source object to the target key, then delete the source.

        A failing delete surfaces through delete's own errors.
        """
        self.ensure_bucket_exists()
        options = self.get_options(
            target_key,
            {"CopySource": f"{self.bucket}/{self.compute_path(source_key)}"},
        )

        context = {"sourceKey": source_key, "targetKey": target_key}
        with self._backend_call("rename", context, not_found_key=source_key):
            self.service.copy_object(options)

        self.delete(source_key)

    def exists(self, key: str) -> bool:
        with self._backend_call("exists", {"key": key}):
            return self.service.does_object_exist(self.bucket, self.compute_path(key))

    def mtime(self, key: str) -> int:
        with self._backend_call("mtime", {"key": key}, not_found_key=key):
            result = self.service.head_object(self.get_options(key))
            return _to_timestamp(result["LastModified"])

    def size(self, key: str) -> int:
        with self._backend_call("size", {"key": key}, not_found_key=key):
            result = self.service.head_object(self.get_options(key))
            return int(result["ContentLength"])

    def mime_type(self, key: str) -> str:
        with self._backend_call("mimeType", {"key": key}, not_found_key=key):
            result = self.service.head_object(self.get_options(key))
            return result["ContentType"]

    def keys(self) -> List[str]:
        return self.list_keys()

    def list_keys(self, prefix: str = "") -> List[str]:
        """
        List keys starting with a prefix, in backend order.

        Args:
            prefix: Key prefix ('' for every key)

        Returns:
            List of abstract keys
        """
        self.ensure_bucket_exists()

        keys = []
        with self._backend_call("listKeys", {"prefix": prefix}):
            for obj in self.service.iter_objects(self.bucket, self.compute_path(prefix)):
                keys.append(self.compute_key(obj["Key"]))

        return keys

    def delete(self, key: str) -> None:
        with self._backend_call("delete", {"key": key}, not_found_key=key):
            self.service.delete_object(self.get_options(key))

    def is_directory(self, key: str) -> bool:
        prefix = self.compute_path(key).rstrip("/") + "/"
        with self._backend_call("isDirectory", {"key": key}):
            result = self.service.list_objects(self.bucket, prefix, max_keys=1)
        return len(result.get("Contents") or []) > 0

    # Bucket gatekeeper

    def ensure_bucket_exists(self) -> bool:
        """
        Ensure the bucket exists, creating it if the create option is set.

        The bucket is created in the region of the client. Once confirmed,
        the bucket is never checked again. Errors from the existence check
        and from the creation are not translated.

        Raises:
            ConfigurationError: If the bucket is missing and may not be created
        """
        if self._bucket_exists:
            return True

        with self._bucket_lock:
            if self._bucket_exists:
                return True

            if self.service.does_bucket_exist(self.bucket):
                self._bucket_exists = True
                return True

            if not self.options.create:
                raise ConfigurationError(self.bucket)

            region = self.service.region
            logger.info(f"Creating bucket '{self.bucket}' in region {region}")
            self.service.create_bucket(self.bucket, region)
            buckets_created_total.inc()
            self._bucket_exists = True

        return True

    # Request builder

    def get_options(self, key: str, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Build the request descriptor for a key.

        Adapter defaults are overridden by the operation fields, which are
        overridden by the key's metadata. ACL, Bucket and Key are always set.

        Args:
            key: Abstract key
            extra: Operation fields (Body, CopySource, ...)

        Returns:
            Request descriptor
        """
        options = dict(self.options.defaults)
        options.update(extra or {})
        options["ACL"] = self.options.acl
        options["Bucket"] = self.bucket
        options["Key"] = self.compute_path(key)
        options.update(self.get_metadata(key))
        return options

    # Path translator

    def compute_path(self, key: str) -> str:
        return self.paths.compute_path(key)

    def compute_key(self, path: str) -> str:
        return self.paths.compute_key(path)

    # Error translator

    @contextmanager
    def _backend_call(
        self,
        operation: str,
        context: Dict[str, Any],
        not_found_key: Optional[str] = None,
    ) -> Iterator[None]:
        """
        Time a backend call and translate its failures.

        A 404 becomes FileNotFound(not_found_key) when a key is given;
        anything else becomes a StorageFailure carrying the operation
        and its arguments.
        """
        start_time = time.time()
        status = "failure"
        try:
            with PerformanceTracker(operation, logger, bucket=self.bucket, key=context.get("key")):
                yield
            status = "success"
        except StorageError:
            raise
        except BackendError as e:
            if not_found_key is not None and e.is_not_found:
                status = "not_found"
                raise FileNotFound(not_found_key) from e
            raise StorageFailure.unexpected_failure(operation, context, e) from e
        except Exception as e:
            raise StorageFailure.unexpected_failure(operation, context, e) from e
        finally:
            record_storage_operation(operation, status, time.time() - start_time)


def _to_timestamp(value: Union[datetime, str]) -> int:
    """Convert a Last-Modified value to a UNIX timestamp."""
    if not isinstance(value, datetime):
        value = date_parser.parse(value)
    return int(value.timestamp())
