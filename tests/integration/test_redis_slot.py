"""Integration tests for the Redis durable slot (in-process fake client)."""

import pytest
import redis

from tripstate.db.redis_store import RedisKeyValueSlot, make_slot_key
from tripstate.db.repositories import PersistenceReadError, PersistenceWriteError
from tripstate.models import DEFAULT_PREFERENCES, Currency
from tripstate.stores.preferences import PreferenceStore


class FakeAsyncRedis:
    """Subset of redis.asyncio.Redis used by the slot; values stored as bytes."""

    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}
        self.down = False

    async def get(self, name: str) -> bytes | None:
        if self.down:
            raise redis.ConnectionError("connection refused")
        return self.data.get(name)

    async def set(self, name: str, value: str) -> bool:
        if self.down:
            raise redis.ConnectionError("connection refused")
        self.data[name] = value.encode("utf-8")
        return True


def test_make_slot_key() -> None:
    """Test slot keys are namespaced."""
    assert make_slot_key("tripstate", "preferences") == "tripstate:preferences"


@pytest.mark.asyncio
async def test_round_trip_decodes_bytes() -> None:
    """Test values written come back as text."""
    client = FakeAsyncRedis()
    slot = RedisKeyValueSlot(client, namespace="test")

    await slot.set("preferences", '{"currency": "GBP"}')

    assert client.data == {"test:preferences": b'{"currency": "GBP"}'}
    assert await slot.get("preferences") == '{"currency": "GBP"}'
    assert await slot.get("other") is None


@pytest.mark.asyncio
async def test_connection_errors_map_to_persistence_errors() -> None:
    """Test Redis errors surface as persistence errors."""
    client = FakeAsyncRedis()
    client.down = True
    slot = RedisKeyValueSlot(client)

    with pytest.raises(PersistenceReadError):
        await slot.get("preferences")
    with pytest.raises(PersistenceWriteError):
        await slot.set("preferences", "{}")


@pytest.mark.asyncio
async def test_store_over_redis_write_then_commit() -> None:
    """Test an outage during update leaves the store on the last committed document."""
    client = FakeAsyncRedis()
    store = PreferenceStore(RedisKeyValueSlot(client))
    await store.load()
    committed = await store.set_currency("AUD")

    client.down = True
    with pytest.raises(PersistenceWriteError):
        await store.set_currency("JPY")

    assert store.preferences == committed
    assert store.preferences.currency == Currency.AUD


@pytest.mark.asyncio
async def test_non_utf8_value_maps_to_read_error() -> None:
    """Test undecodable bytes surface as a read error from the slot."""
    client = FakeAsyncRedis()
    client.data["tripstate:preferences"] = b"\xff\xfe{"
    slot = RedisKeyValueSlot(client)

    with pytest.raises(PersistenceReadError):
        await slot.get("preferences")


@pytest.mark.asyncio
async def test_store_load_over_non_utf8_value_keeps_defaults() -> None:
    """Test load falls back to defaults when the stored bytes are not text."""
    client = FakeAsyncRedis()
    client.data["tripstate:preferences"] = b"\xff\xfe{"
    store = PreferenceStore(RedisKeyValueSlot(client))

    await store.load()

    assert store.loading is False
    assert store.preferences == DEFAULT_PREFERENCES
