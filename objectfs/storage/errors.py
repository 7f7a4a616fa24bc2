"""
Error taxonomy for storage adapters.

Every error raised by an adapter derives from StorageError so callers can
catch the whole family at once:

- FileNotFound: the addressed object does not exist
- StorageFailure: any other backend-originating failure
- ConfigurationError: the adapter is pointed at a bucket that is missing
"""

from typing import Any, Dict, Optional


class StorageError(Exception):
    """Exception raised for storage-related errors."""
    pass


class FileNotFound(StorageError):
    """Raised when the object addressed by a key does not exist."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"The file \"{key}\" was not found.")


class StorageFailure(StorageError):
    """
    Raised when the backend fails for any reason other than a missing object.

    Carries the name of the failed operation and its input arguments so the
    failure can be logged or retried by a higher layer.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        context: Dict[str, Any],
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.context = context
        self.cause = cause

    @classmethod
    def unexpected_failure(
        cls,
        operation: str,
        context: Dict[str, Any],
        cause: Optional[BaseException] = None,
    ) -> "StorageFailure":
        """
        Build a failure for an operation that broke unexpectedly.

        Args:
            operation: Operation name (e.g. 'read', 'listKeys')
            context: Input arguments of the operation
            cause: Original exception

        Returns:
            StorageFailure instance
        """
        arguments = ", ".join(f"{name}: {value!r}" for name, value in context.items())
        message = (
            f"An unexpected error happened during {operation} "
            f"(arguments: {arguments})."
        )
        if cause is not None:
            message += f" Cause: {cause}"
        return cls(message, operation, context, cause)


class ConfigurationError(StorageError):
    """Raised when the configured bucket does not exist and may not be created."""

    def __init__(self, bucket: str):
        self.bucket = bucket
        super().__init__(f"The configured bucket \"{bucket}\" does not exist.")
