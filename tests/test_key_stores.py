"""Tests for the key store adapters."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from job_portal.features.cache import MemoryKeyStore, RedisKeyStore
from job_portal.features.cache.adapters import memory_adapter


class TestMemoryKeyStore:
    """Test the in-process key store."""

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        store = MemoryKeyStore()
        await store.set("jobs:list:/api/v1/jobs", '{"total": 0}', ttl=60)

        assert await store.get("jobs:list:/api/v1/jobs") == '{"total": 0}'
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_expired_entry_is_evicted_on_read(self, monkeypatch):
        store = MemoryKeyStore()
        now = [1000.0]
        monkeypatch.setattr(memory_adapter, "time", SimpleNamespace(monotonic=lambda: now[0]))

        await store.set("key", "value", ttl=5)
        now[0] += 5

        assert await store.get("key") is None
        assert await store.keys() == []

    @pytest.mark.asyncio
    async def test_delete_matching_uses_glob_semantics(self):
        store = MemoryKeyStore()
        await store.set("jobs:detail:/api/v1/jobs/1", "a")
        await store.set("jobs:detail:/api/v1/jobs/1?x=1", "b")
        await store.set("jobs:detail:/api/v1/jobs/12", "c")
        await store.set("jobs:list:/api/v1/jobs", "d")

        removed = await store.delete_matching("jobs:detail:/api/v1/jobs/1[?]*")

        assert removed == 1
        assert sorted(await store.keys("jobs:detail:*")) == [
            "jobs:detail:/api/v1/jobs/1",
            "jobs:detail:/api/v1/jobs/12",
        ]

    @pytest.mark.asyncio
    async def test_ping_and_close(self):
        store = MemoryKeyStore()
        await store.set("key", "value")

        assert await store.ping() is True
        await store.close()
        assert await store.get("key") is None


def _failing_client() -> MagicMock:
    client = MagicMock()
    error = RedisConnectionError("connection refused")
    client.get = AsyncMock(side_effect=error)
    client.set = AsyncMock(side_effect=error)
    client.delete = AsyncMock(side_effect=error)
    client.ping = AsyncMock(side_effect=error)
    client.scan_iter = MagicMock(side_effect=error)
    return client


class TestRedisKeyStore:
    """Test the Redis adapter against a mocked client."""

    @pytest.mark.asyncio
    async def test_keys_are_namespaced(self):
        client = MagicMock()
        client.get = AsyncMock(return_value="cached")
        client.set = AsyncMock()
        store = RedisKeyStore("redis://localhost:6379/0", namespace="job-portal:testing:", client=client)

        assert await store.get("jobs:list:/api/v1/jobs") == "cached"
        await store.set("jobs:list:/api/v1/jobs", "payload", ttl=30)

        client.get.assert_awaited_once_with("job-portal:testing:jobs:list:/api/v1/jobs")
        client.set.assert_awaited_once_with("job-portal:testing:jobs:list:/api/v1/jobs", "payload", ex=30)

    @pytest.mark.asyncio
    async def test_delete_matching_scans_and_deletes(self):
        async def scan_iter(match, count):
            for key in ("ns:jobs:list:/a", "ns:jobs:list:/b"):
                yield key

        client = MagicMock()
        client.scan_iter = scan_iter
        client.delete = AsyncMock(return_value=2)
        store = RedisKeyStore("redis://localhost", namespace="ns:", client=client)

        assert await store.delete_matching("jobs:list:*") == 2
        client.delete.assert_awaited_once_with("ns:jobs:list:/a", "ns:jobs:list:/b")

    @pytest.mark.asyncio
    async def test_keys_strip_namespace(self):
        async def scan_iter(match, count):
            yield "ns:jobs:list:/a"

        client = MagicMock()
        client.scan_iter = scan_iter
        store = RedisKeyStore("redis://localhost", namespace="ns:", client=client)

        assert await store.keys("jobs:*") == ["jobs:list:/a"]

    @pytest.mark.asyncio
    async def test_unreachable_redis_degrades_silently(self):
        store = RedisKeyStore("redis://localhost", client=_failing_client())

        assert await store.get("key") is None
        await store.set("key", "value", ttl=10)
        await store.delete("key")
        assert await store.delete_matching("*") == 0
        assert await store.keys() == []
        assert await store.ping() is False

    @pytest.mark.asyncio
    async def test_closed_store_behaves_as_empty(self):
        client = MagicMock()
        client.aclose = AsyncMock()
        store = RedisKeyStore("redis://localhost", client=client)

        await store.close()

        client.aclose.assert_awaited_once()
        assert await store.get("key") is None
        assert await store.ping() is False
