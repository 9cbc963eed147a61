"""Domain exceptions for cache-aside repositories.

Persistent-store failures propagate to callers unchanged; cache-store
failures are raised by cache backends and handled by the cache-aside layer
(treated as a miss on read, logged on write, reported on invalidation).
"""

from typing import Any


class CacheAsideException(Exception):
    """Base exception for all cachedrepo errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. cache_key, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class NullInputError(CacheAsideException):
    """Raised when add/update receive None and null input is rejected."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"{operation} requires an entity, got None",
            "NULL_INPUT",
            {"operation": operation},
        )


class ResourceNotFoundException(CacheAsideException):
    """Raised when a requested resource is not found in the persistent store."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'article').
            resource_id: The key that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class PersistentStoreError(CacheAsideException):
    """Raised when the persistent store fails (connectivity, constraint, driver error)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Persistent store {operation} failed: {reason}",
            "PERSISTENT_STORE_ERROR",
            {"operation": operation, "reason": reason},
        )


class CacheStoreError(CacheAsideException):
    """Raised when the cache backend fails (unreachable, serialization failure)."""

    def __init__(self, operation: str, key: str, reason: str) -> None:
        """Initialize with the failed cache operation and key.

        Args:
            operation: Cache operation ('get', 'set', 'delete').
            key: Cache key involved.
            reason: Short description of the failure.
        """
        super().__init__(
            f"Cache {operation} failed for key {key!r}: {reason}",
            "CACHE_STORE_ERROR",
            {"operation": operation, "cache_key": key, "reason": reason},
        )
