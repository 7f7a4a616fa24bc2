"""
Abstract capability interfaces for storage adapters.

The base StorageAdapter covers the operations every adapter must provide.
Optional capabilities (metadata, prefix listing, size, mime type) are
separate interfaces so an adapter declares exactly what it supports.
"""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, List, Union

Content = Union[bytes, bytearray, str, BinaryIO]


class StorageAdapter(ABC):
    """
    Abstract base class for key-addressed storage backends.

    All storage implementations must implement these methods to provide a
    consistent interface.
    """

    @abstractmethod
    def read(self, key: str) -> bytes:
        """
        Read the content stored under a key.

        Args:
            key: Abstract key

        Returns:
            Stored bytes

        Raises:
            FileNotFound: If nothing is stored under the key
            StorageFailure: If the read fails
        """
        pass

    @abstractmethod
    def write(self, key: str, content: Content) -> None:
        """
        Store content under a key, replacing any previous content.

        Args:
            key: Abstract key
            content: Bytes, text or a readable binary stream

        Raises:
            StorageFailure: If the write fails
        """
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """
        Check if something is stored under a key.

        Args:
            key: Abstract key

        Returns:
            True if the key exists, False otherwise
        """
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """Return every key in the storage."""
        pass

    @abstractmethod
    def mtime(self, key: str) -> int:
        """
        Get the last modification time of a key.

        Args:
            key: Abstract key

        Returns:
            UNIX timestamp in seconds
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete the content stored under a key."""
        pass

    @abstractmethod
    def rename(self, source_key: str, target_key: str) -> None:
        """Move content from one key to another."""
        pass

    @abstractmethod
    def is_directory(self, key: str) -> bool:
        """Check if a key is a directory, i.e. a prefix of other keys."""
        pass


class MetadataSupporter(ABC):
    """Adapter capability: per-key metadata attached to outgoing requests."""

    @abstractmethod
    def set_metadata(self, key: str, metadata: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def get_metadata(self, key: str) -> Dict[str, Any]:
        pass


class ListKeysAware(ABC):
    """Adapter capability: efficient listing of keys under a prefix."""

    @abstractmethod
    def list_keys(self, prefix: str = "") -> List[str]:
        pass


class SizeCalculator(ABC):
    """Adapter capability: content size lookup."""

    @abstractmethod
    def size(self, key: str) -> int:
        pass


class MimeTypeProvider(ABC):
    """Adapter capability: mime type lookup."""

    @abstractmethod
    def mime_type(self, key: str) -> str:
        pass
