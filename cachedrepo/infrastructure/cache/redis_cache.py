"""Redis-based cache service backing cache-aside repositories.

Provides async Redis caching with optional TTL. Values are stored as JSON,
so repositories pair it with a dict-producing codec (PydanticCodec, OrmCodec).
Integrates with cachedrepo.infrastructure.cache.keys for key format (DRY).
"""

from __future__ import annotations

import json
from typing import Any

import redis.asyncio as redis

from cachedrepo.core.config import Settings, get_settings
from cachedrepo.domain.exceptions import CacheStoreError
from cachedrepo.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class CacheService:
    """Async Redis cache service implementing CacheProtocol.

    Uses cachedrepo.core.config for connection settings. Call connect() at
    startup and disconnect() at shutdown. Redis command failures are logged
    and reported as a miss (get) or False (set/delete); values that cannot be
    (de)serialized raise CacheStoreError.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = False

    async def connect(self) -> None:
        """Establish (or verify an injected) Redis connection. Call on app startup."""
        if not self.settings.redis_enabled:
            logger.info("Redis cache disabled by settings")
            return
        try:
            if self.redis is None:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
                    decode_responses=True,
                    socket_connect_timeout=self.settings.redis_socket_timeout,
                    socket_keepalive=True,
                )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning(
                "Redis connection failed: %s. Cache disabled.",
                e,
            )
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Attempt to reconnect after disconnect. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing stale Redis connection")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    @staticmethod
    def _decode(key: str, value: Any) -> Any:
        try:
            return json.loads(value)
        except (TypeError, ValueError) as e:
            raise CacheStoreError("get", key, f"invalid JSON payload: {e}") from e

    @staticmethod
    def _encode(key: str, value: Any) -> str:
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheStoreError("set", key, f"value is not JSON-serializable: {e}") from e

    async def _write(self, key: str, serialized: str, ttl: int | None) -> None:
        if ttl:
            await self.redis.setex(key, ttl, serialized)
        else:
            await self.redis.set(key, serialized)

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Args:
            key: Cache key (use cachedrepo.infrastructure.cache.keys builders).

        Returns:
            Cached value or None.

        Raises:
            CacheStoreError: If the stored payload is not valid JSON.
        """
        if not self.is_available() or self.redis is None:
            return None
        try:
            value = await self.redis.get(key)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect():
                try:
                    value = await self.redis.get(key)
                except redis.RedisError:
                    logger.exception("Cache get error for key %s after reconnect", key)
                    return None
            else:
                logger.warning("Cache get unavailable for key %s (Redis disconnected)", key)
                return None
        except redis.RedisError:
            logger.exception("Cache get error for key %s", key)
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return self._decode(key, value)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value, with expiry when ttl is set. Returns True on success.

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds; None or 0 stores without expiry.

        Returns:
            True if stored, False otherwise.

        Raises:
            CacheStoreError: If value is not JSON-serializable.
        """
        if not self.is_available() or self.redis is None:
            return False
        serialized = self._encode(key, value)
        try:
            await self._write(key, serialized, ttl)
            logger.debug("Cache SET: %s (TTL: %s)", key, ttl)
            return True
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect():
                try:
                    await self._write(key, serialized, ttl)
                    return True
                except redis.RedisError:
                    logger.exception("Cache set error for key %s after reconnect", key)
            logger.warning("Cache set unavailable for key %s (Redis disconnected)", key)
            return False
        except redis.RedisError:
            logger.exception("Cache set error for key %s", key)
            return False

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the DEL command was applied.

        A missing key still counts as applied.

        Args:
            key: Cache key to delete.

        Returns:
            True if deleted (or absent), False otherwise.
        """
        if not self.is_available() or self.redis is None:
            return False
        try:
            await self.redis.delete(key)
            logger.debug("Cache DELETE: %s", key)
            return True
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect():
                try:
                    await self.redis.delete(key)
                    return True
                except redis.RedisError:
                    logger.exception("Cache delete error for key %s after reconnect", key)
            return False
        except redis.RedisError:
            logger.exception("Cache delete error for key %s", key)
            return False
