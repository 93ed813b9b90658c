import asyncio

import pytest

from prepforge.services.cache import TTLCache, sweep_caches_forever


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_entries_expire_lazily_on_read():
    clock = FakeClock()
    cache = TTLCache(name="t", default_ttl_seconds=10, clock=clock)
    cache.set("k", {"v": 1})

    assert cache.get("k") == {"v": 1}
    clock.now += 10
    assert cache.get("k") is None
    assert len(cache) == 0


def test_get_returns_independent_copies():
    cache = TTLCache(name="t", default_ttl_seconds=10)
    cache.set("k", [1, 2])
    cache.get("k").append(3)

    assert cache.get("k") == [1, 2]


def test_clear_expired_and_stats():
    clock = FakeClock()
    cache = TTLCache(name="t", default_ttl_seconds=10, clock=clock)
    cache.set("short", 1, ttl_seconds=1)
    cache.set("long", 2)
    clock.now += 5

    assert cache.clear_expired() == 1
    assert cache.get("long") == 2
    assert cache.get("missing") is None
    stats = cache.stats()
    assert stats["size"] == 1
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["keys"] == ["long"]


def test_delete_and_clear():
    cache = TTLCache(name="t", default_ttl_seconds=10)
    cache.set("a", 1)
    cache.set("b", 2)

    assert cache.delete("a") is True
    assert cache.delete("a") is False
    cache.clear()
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_get_or_compute_only_computes_on_miss():
    cache = TTLCache(name="t", default_ttl_seconds=10)
    calls = []

    async def compute():
        calls.append(1)
        return "value"

    assert await cache.get_or_compute("k", compute) == "value"
    assert await cache.get_or_compute("k", compute) == "value"
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_sweep_task_removes_expired_entries():
    cache = TTLCache(name="t", default_ttl_seconds=0)
    cache.set("k", 1)
    task = asyncio.create_task(sweep_caches_forever([cache], interval_seconds=0.01))
    await asyncio.sleep(0.05)
    task.cancel()

    assert len(cache) == 0
