"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
CacheAsideRepository consumes IRepository and exposes the same shape, so it is
a drop-in substitute for an uncached repository.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Protocol


class IRepository[EntityT, KeyT: Hashable](Protocol):
    """Protocol for a CRUD repository over a persistent store (DIP)."""

    async def add(self, entity: EntityT) -> EntityT:
        """Persist a new entity; return it as stored (generated key, defaults)."""
        ...

    async def find(self, key: KeyT) -> EntityT | None:
        """Return the entity with the given key, or None."""
        ...

    async def update(self, entity: EntityT) -> EntityT:
        """Replace an existing entity; return it as stored."""
        ...

    async def remove(self, key: KeyT) -> None:
        """Delete the entity with the given key."""
        ...
