"""Cache: protocol, key derivation, entity codecs and the Redis binding.

Used by CacheAsideRepository. Key format is in keys.py (DRY).
"""

from cachedrepo.infrastructure.cache.cache_protocol import CacheProtocol
from cachedrepo.infrastructure.cache.codecs import (
    EntityCodec,
    OrmCodec,
    PassthroughCodec,
    PydanticCodec,
)
from cachedrepo.infrastructure.cache.keys import (
    entity_cache_key,
    qualified_namespace,
    validate_namespace,
)
from cachedrepo.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheProtocol",
    "CacheService",
    "EntityCodec",
    "OrmCodec",
    "PassthroughCodec",
    "PydanticCodec",
    "entity_cache_key",
    "qualified_namespace",
    "validate_namespace",
]
