"""CacheService unit tests with a mocked redis.asyncio client."""

import json
import uuid
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from cachedrepo.core.config import Settings
from cachedrepo.domain.exceptions import CacheStoreError
from cachedrepo.infrastructure.cache.codecs import OrmCodec
from cachedrepo.infrastructure.cache.redis_cache import CacheService
from cachedrepo.infrastructure.persistence.repositories import CacheAsideRepository
from tests.fakes import Invoice, InvoiceStatus


@pytest.fixture
def redis_client() -> AsyncMock:
    client = AsyncMock()
    client.ping = AsyncMock(return_value=True)
    client.get = AsyncMock(return_value=None)
    return client


@pytest.fixture
async def service(redis_client) -> CacheService:
    svc = CacheService(redis_client=redis_client, settings=Settings())
    await svc.connect()
    return svc


async def test_connect_pings_injected_client(service, redis_client) -> None:
    redis_client.ping.assert_awaited_once()
    assert service.is_available()


async def test_connect_failure_disables_cache(redis_client) -> None:
    redis_client.ping = AsyncMock(side_effect=redis.ConnectionError("refused"))
    svc = CacheService(redis_client=redis_client, settings=Settings())

    await svc.connect()

    assert not svc.is_available()
    assert await svc.get("article:1") is None
    assert await svc.set("article:1", {"id": 1}) is False
    assert await svc.delete("article:1") is False


async def test_connect_skipped_when_disabled(redis_client) -> None:
    svc = CacheService(redis_client=redis_client, settings=Settings(redis_enabled=False))

    await svc.connect()

    redis_client.ping.assert_not_awaited()
    assert not svc.is_available()


async def test_get_hit_decodes_json(service, redis_client) -> None:
    redis_client.get = AsyncMock(return_value=json.dumps({"id": 1, "title": "Hi"}))

    assert await service.get("article:1") == {"id": 1, "title": "Hi"}
    redis_client.get.assert_awaited_once_with("article:1")


async def test_get_miss_returns_none(service) -> None:
    assert await service.get("article:1") is None


async def test_get_invalid_payload_raises_cache_store_error(service, redis_client) -> None:
    redis_client.get = AsyncMock(return_value="{not json")

    with pytest.raises(CacheStoreError) as exc_info:
        await service.get("article:1")

    assert exc_info.value.details["operation"] == "get"


async def test_get_redis_error_is_a_miss(service, redis_client) -> None:
    redis_client.get = AsyncMock(side_effect=redis.ResponseError("WRONGTYPE"))

    assert await service.get("article:1") is None


async def test_set_with_ttl_uses_setex(service, redis_client) -> None:
    assert await service.set("article:1", {"id": 1}, ttl=60) is True

    redis_client.setex.assert_awaited_once_with("article:1", 60, json.dumps({"id": 1}))
    redis_client.set.assert_not_awaited()


async def test_set_without_ttl_uses_plain_set(service, redis_client) -> None:
    assert await service.set("article:1", {"id": 1}) is True

    redis_client.set.assert_awaited_once_with("article:1", json.dumps({"id": 1}))
    redis_client.setex.assert_not_awaited()


async def test_set_unserializable_value_raises(service, redis_client) -> None:
    with pytest.raises(CacheStoreError) as exc_info:
        await service.set("article:1", object())

    assert exc_info.value.details["operation"] == "set"
    redis_client.set.assert_not_awaited()


async def test_orm_entity_with_uuid_key_is_written_to_redis(service, redis_client) -> None:
    """UUID and Numeric columns are JSON-encoded, so add reaches SETEX."""
    invoice_id = uuid.UUID("12345678-1234-5678-1234-567812345678")
    store = AsyncMock()
    store.add = AsyncMock(
        return_value=Invoice(id=invoice_id, amount=Decimal("5.00"), status=InvoiceStatus.DRAFT)
    )
    repo = CacheAsideRepository(store, service, "invoice", codec=OrmCodec(Invoice), ttl=60)

    await repo.add(Invoice(amount=Decimal("5.00"), status=InvoiceStatus.DRAFT))

    redis_client.setex.assert_awaited_once_with(
        f"invoice:{invoice_id}",
        60,
        json.dumps({"id": str(invoice_id), "amount": "5.00", "status": "draft"}),
    )


async def test_set_connection_error_without_reconnect_returns_false(service, redis_client) -> None:
    redis_client.set = AsyncMock(side_effect=redis.ConnectionError("gone"))
    service.settings = Settings(redis_enabled=False)

    assert await service.set("article:1", {"id": 1}) is False
    assert not service.is_available()


async def test_delete(service, redis_client) -> None:
    assert await service.delete("article:1") is True
    redis_client.delete.assert_awaited_once_with("article:1")


async def test_delete_redis_error_returns_false(service, redis_client) -> None:
    redis_client.delete = AsyncMock(side_effect=redis.ResponseError("boom"))

    assert await service.delete("article:1") is False


async def test_disconnect_closes_client(service, redis_client) -> None:
    await service.disconnect()

    redis_client.aclose.assert_awaited_once()
    assert not service.is_available()
