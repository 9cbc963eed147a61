"""Entity capability: anything the persistent store owns and can identify by key."""

from collections.abc import Hashable
from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyedEntity[KeyT: Hashable](Protocol):
    """Entity exposing its unique key (e.g. primary key)."""

    def get_key(self) -> KeyT:
        """Return the key identifying this entity in the persistent store."""
        ...
