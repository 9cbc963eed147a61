"""Cache-aside repository: wraps a persistent-store repository with a key-value cache.

Reads prefer the cache and backfill it on a miss; writes go to the persistent
store first and then overwrite the cache entry; removes invalidate the cache
entry before deleting the record. The persistent store is the source of
truth: cache failures never mask a store outcome, except that a failed
invalidation is reported because a stale copy would outlive the record.

There is no coordination between concurrent operations. Two concurrent misses
on one key both read the store and both backfill (idempotent), and a find
racing an update can backfill the pre-update value; ttl bounds how long such
a copy is served.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING

from cachedrepo.core.config import Settings, get_settings
from cachedrepo.domain.exceptions import CacheStoreError, NullInputError
from cachedrepo.infrastructure.cache.codecs import PassthroughCodec
from cachedrepo.infrastructure.cache.keys import entity_cache_key, qualified_namespace
from cachedrepo.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from cachedrepo.application.interfaces.repositories import IRepository
    from cachedrepo.domain.entities import KeyedEntity
    from cachedrepo.infrastructure.cache.cache_protocol import CacheProtocol
    from cachedrepo.infrastructure.cache.codecs import EntityCodec

logger = get_logger(__name__)


class CacheAsideRepository[EntityT: KeyedEntity, KeyT: Hashable]:
    """Drop-in IRepository that keeps a cache in front of another IRepository.

    Holds no mutable state beyond its collaborators, so one instance can be
    shared by concurrent tasks.

    Args:
        repository: Persistent-store repository (source of truth).
        cache: Cache backend addressed by string keys.
        namespace: Entity namespace used in cache keys (no ':' allowed).
        codec: Converts entities to/from the cached form; passthrough by default.
        ttl: Expiry in seconds for every cache write; None stores without expiry.
        reject_null: Raise NullInputError on add/update(None) instead of returning None.
    """

    def __init__(
        self,
        repository: IRepository[EntityT, KeyT],
        cache: CacheProtocol,
        namespace: str,
        *,
        codec: EntityCodec[EntityT] | None = None,
        ttl: int | None = None,
        reject_null: bool = False,
    ) -> None:
        if repository is None:
            raise ValueError("repository is required")
        if cache is None:
            raise ValueError("cache is required")
        if ttl is not None and ttl < 0:
            raise ValueError(f"ttl must be >= 0, got: {ttl}")
        self.repository = repository
        self.cache = cache
        self.namespace = qualified_namespace(namespace)
        self.codec: EntityCodec[EntityT] = codec or PassthroughCodec()
        self.ttl = ttl or None
        self.reject_null = reject_null

    @classmethod
    def from_settings(
        cls,
        repository: IRepository[EntityT, KeyT],
        cache: CacheProtocol,
        namespace: str,
        *,
        codec: EntityCodec[EntityT] | None = None,
        reject_null: bool = False,
        settings: Settings | None = None,
    ) -> CacheAsideRepository[EntityT, KeyT]:
        """Build with ttl and namespace prefix taken from settings."""
        settings = settings or get_settings()
        return cls(
            repository,
            cache,
            qualified_namespace(namespace, settings.cache_namespace_prefix),
            codec=codec,
            ttl=settings.cache_ttl_entities,
            reject_null=reject_null,
        )

    def cache_key(self, key: KeyT) -> str:
        """Return the cache key for an entity key in this repository's namespace."""
        return entity_cache_key(self.namespace, key)

    def _null_input(self, operation: str) -> None:
        if self.reject_null:
            raise NullInputError(operation)
        logger.warning("%s called with None; returning None without store access", operation)

    async def add(self, entity: EntityT | None) -> EntityT | None:
        """Add the entity to the persistent store, then cache the stored copy."""
        if entity is None:
            self._null_input("add")
            return None
        logger.info("Adding entity to database")
        stored = await self.repository.add(entity)
        await self._save_cache_entry(stored)
        return stored

    async def find(self, key: KeyT) -> EntityT | None:
        """Return the entity from cache, or from the store with a cache backfill."""
        cache_key = self.cache_key(key)
        cached = await self._load_cache_entry(cache_key)
        if cached is not None:
            return cached
        logger.info("Finding record in database")
        entity = await self.repository.find(key)
        if entity is not None:
            await self._save_cache_entry(entity)
        return entity

    async def update(self, entity: EntityT | None) -> EntityT | None:
        """Update the persistent store, then overwrite (or prime) the cache entry."""
        if entity is None:
            self._null_input("update")
            return None
        logger.info("Updating entity in database")
        stored = await self.repository.update(entity)
        await self._save_cache_entry(stored)
        return stored

    async def remove(self, key: KeyT) -> None:
        """Invalidate the cache entry, then delete the record from the store.

        Raises:
            CacheStoreError: If the cache entry could not be removed, including
                when the cache is unavailable. The persistent record is left
                untouched so the call can be retried.
        """
        cache_key = self.cache_key(key)
        if not self.cache.is_available():
            raise CacheStoreError("delete", cache_key, "cache unavailable")
        logger.info("Removing entity from cache")
        if not await self.cache.delete(cache_key):
            raise CacheStoreError("delete", cache_key, "cache did not apply the delete")
        logger.info("Removing record from database")
        await self.repository.remove(key)

    async def _load_cache_entry(self, cache_key: str) -> EntityT | None:
        """Return the decoded cache entry; None on miss, unavailable cache or cache error."""
        if not self.cache.is_available():
            return None
        logger.info("Finding entity in cache")
        try:
            data = await self.cache.get(cache_key)
            if data is None:
                logger.debug("Cache miss for %s", cache_key)
                return None
            entity = self.codec.load(data)
        except CacheStoreError as e:
            logger.warning("Cache read failed for %s, falling back to database: %s", cache_key, e)
            return None
        except (TypeError, ValueError, KeyError) as e:
            logger.warning("Discarding undecodable cache entry %s: %s", cache_key, e)
            return None
        logger.debug("Cache hit for %s", cache_key)
        return entity

    async def _save_cache_entry(self, entity: EntityT) -> None:
        """Write the entity under its cache key; failures are logged, not raised."""
        if not self.cache.is_available():
            return
        cache_key = self.cache_key(entity.get_key())
        logger.info("Saving cache entry")
        try:
            stored = await self.cache.set(cache_key, self._encode(cache_key, entity), ttl=self.ttl)
        except CacheStoreError as e:
            logger.warning("Cache write failed for %s: %s", cache_key, e)
            return
        if not stored:
            logger.warning("Cache write not applied for %s", cache_key)

    def _encode(self, cache_key: str, entity: EntityT) -> object:
        try:
            return self.codec.dump(entity)
        except Exception as e:
            raise CacheStoreError("set", cache_key, f"entity could not be encoded: {e}") from e
