"""Cache protocol for the repository layer (DIP)."""

from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Protocol for cache backends (e.g. Redis). Used by cache-aside repositories.

    Backends may raise CacheStoreError; set/delete return False when the
    command was not applied.
    """

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value with optional TTL in seconds. Returns True on success."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the command was applied."""
        ...
