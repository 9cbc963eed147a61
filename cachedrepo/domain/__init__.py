"""Domain layer: entity capability and exceptions.

No dependencies on infrastructure. Used by application and infrastructure layers.
"""

from cachedrepo.domain.entities import KeyedEntity
from cachedrepo.domain.exceptions import (
    CacheAsideException,
    CacheStoreError,
    NullInputError,
    PersistentStoreError,
    ResourceNotFoundException,
)

__all__ = [
    # Entities
    "KeyedEntity",
    # Exceptions
    "CacheAsideException",
    "CacheStoreError",
    "NullInputError",
    "PersistentStoreError",
    "ResourceNotFoundException",
]
