"""cachedrepo: cache-aside decorator for async CRUD repositories.

Wrap any IRepository with CacheAsideRepository to read through a cache and
keep it in sync on writes. Redis and SQLAlchemy bindings are included.
"""

from cachedrepo.application.interfaces import IRepository
from cachedrepo.domain import (
    CacheAsideException,
    CacheStoreError,
    KeyedEntity,
    NullInputError,
    PersistentStoreError,
    ResourceNotFoundException,
)
from cachedrepo.infrastructure.cache import (
    CacheProtocol,
    CacheService,
    OrmCodec,
    PassthroughCodec,
    PydanticCodec,
    entity_cache_key,
)
from cachedrepo.infrastructure.persistence.repositories import (
    CacheAsideRepository,
    SqlAlchemyRepository,
)

__all__ = [
    "CacheAsideException",
    "CacheAsideRepository",
    "CacheProtocol",
    "CacheService",
    "CacheStoreError",
    "IRepository",
    "KeyedEntity",
    "NullInputError",
    "OrmCodec",
    "PassthroughCodec",
    "PersistentStoreError",
    "PydanticCodec",
    "ResourceNotFoundException",
    "SqlAlchemyRepository",
    "entity_cache_key",
]
