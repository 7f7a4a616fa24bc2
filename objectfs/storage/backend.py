"""
Object-store client boundary.

Adapters talk to the backend through ObjectStoreClient. The boto3
implementation converts every botocore failure into a BackendError carrying
the HTTP status code, so adapters classify errors in one place without
inspecting botocore responses themselves.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Optional, Set

from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

# S3 rejects an explicit LocationConstraint for its default region
DEFAULT_REGION = "us-east-1"


class BackendError(Exception):
    """Structured error raised by an object-store client."""

    def __init__(self, status_code: Optional[int], code: str = "", message: str = ""):
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(f"[{status_code or '-'}] {code}: {message}".rstrip(": "))

    @classmethod
    def from_client_error(cls, error: ClientError) -> "BackendError":
        """Build from a botocore ClientError."""
        response = getattr(error, "response", None) or {}
        details = response.get("Error", {})
        status = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if status is None and str(details.get("Code", "")).isdigit():
            status = int(details["Code"])
        return cls(status, str(details.get("Code", "")), str(details.get("Message", error)))

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class ObjectStoreClient(ABC):
    """
    Capability an adapter needs from an object store.

    Request methods take a descriptor dict using S3 field names
    (Bucket, Key, ACL, Body, CopySource, ContentType, ...). Implementations
    ignore fields the target operation does not accept.
    """

    @property
    @abstractmethod
    def region(self) -> Optional[str]:
        """Region the client is configured for."""
        pass

    @abstractmethod
    def get_object(self, params: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def put_object(self, params: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def copy_object(self, params: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def delete_object(self, params: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def head_object(self, params: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def does_object_exist(self, bucket: str, key: str) -> bool:
        pass

    @abstractmethod
    def does_bucket_exist(self, bucket: str) -> bool:
        pass

    @abstractmethod
    def create_bucket(self, bucket: str, region: Optional[str] = None) -> None:
        pass

    @abstractmethod
    def iter_objects(self, bucket: str, prefix: str = "") -> Iterator[Dict[str, Any]]:
        """Iterate over every object under a prefix, following pagination."""
        pass

    @abstractmethod
    def list_objects(self, bucket: str, prefix: str = "", max_keys: int = 1000) -> Dict[str, Any]:
        """Fetch a single page of objects under a prefix."""
        pass


class Boto3ObjectStore(ObjectStoreClient):
    """
    ObjectStoreClient over a boto3 S3 client.

    The boto3 client is shared: its construction, credentials and lifetime
    belong to the caller.
    """

    def __init__(self, client):
        """
        Initialize with an existing client.

        Args:
            client: boto3 S3 client (boto3.client('s3', ...))
        """
        self.client = client
        self._accepted: Dict[str, Set[str]] = {}

    @property
    def region(self) -> Optional[str]:
        return self.client.meta.region_name

    def _accepted_fields(self, operation_name: str) -> Set[str]:
        """Names of the request fields an S3 operation accepts."""
        if operation_name not in self._accepted:
            model = self.client.meta.service_model.operation_model(operation_name)
            self._accepted[operation_name] = set(model.input_shape.members)
        return self._accepted[operation_name]

    def _call(self, operation_name: str, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        accepted = self._accepted_fields(operation_name)
        kwargs = {name: value for name, value in params.items() if name in accepted}
        logger.debug(f"S3 {operation_name} {kwargs.get('Bucket')}/{kwargs.get('Key', '')}")
        try:
            return getattr(self.client, method)(**kwargs)
        except ClientError as e:
            raise BackendError.from_client_error(e) from e
        except BotoCoreError as e:
            raise BackendError(None, type(e).__name__, str(e)) from e

    def get_object(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("GetObject", "get_object", params)

    def put_object(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("PutObject", "put_object", params)

    def copy_object(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("CopyObject", "copy_object", params)

    def delete_object(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("DeleteObject", "delete_object", params)

    def head_object(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("HeadObject", "head_object", params)

    def does_object_exist(self, bucket: str, key: str) -> bool:
        try:
            self.head_object({"Bucket": bucket, "Key": key})
        except BackendError as e:
            # Without s3:ListBucket a missing object answers 403, not 404
            if e.status_code is not None and 400 <= e.status_code < 500:
                return False
            raise
        return True

    def does_bucket_exist(self, bucket: str) -> bool:
        try:
            self._call("HeadBucket", "head_bucket", {"Bucket": bucket})
        except BackendError as e:
            if e.is_not_found:
                return False
            # Forbidden means the bucket exists but belongs to someone else
            if e.status_code == 403:
                return True
            raise
        return True

    def create_bucket(self, bucket: str, region: Optional[str] = None) -> None:
        params: Dict[str, Any] = {"Bucket": bucket}
        if region and region != DEFAULT_REGION:
            params["CreateBucketConfiguration"] = {"LocationConstraint": region}
        self._call("CreateBucket", "create_bucket", params)

    def iter_objects(self, bucket: str, prefix: str = "") -> Iterator[Dict[str, Any]]:
        paginator = self.client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
                for obj in page.get("Contents", []):
                    yield obj
        except ClientError as e:
            raise BackendError.from_client_error(e) from e
        except BotoCoreError as e:
            raise BackendError(None, type(e).__name__, str(e)) from e

    def list_objects(self, bucket: str, prefix: str = "", max_keys: int = 1000) -> Dict[str, Any]:
        return self._call(
            "ListObjectsV2",
            "list_objects_v2",
            {"Bucket": bucket, "Prefix": prefix, "MaxKeys": max_keys},
        )
