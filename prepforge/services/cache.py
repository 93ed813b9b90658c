import asyncio
import copy
import logging
import time
import typing

logger = logging.getLogger(__name__)

T = typing.TypeVar("T")


class TTLCache:
    """In-process key/value store with per-entry expiry.

    Expired entries are dropped on read; `clear_expired` (run by the sweep task)
    reclaims the ones nobody asks for again. Values are deep-copied on the way in
    and out, so callers can never mutate a cached entry.
    """

    def __init__(self, *, name: str, default_ttl_seconds: float, clock: typing.Callable[[], float] = time.monotonic):
        self.name = name
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[typing.Any, float]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> typing.Any | None:
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            logger.debug("cache[%s] miss key=%s", self.name, key)
            return None
        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            self._misses += 1
            logger.debug("cache[%s] expired key=%s", self.name, key)
            return None
        self._hits += 1
        logger.debug("cache[%s] hit key=%s", self.name, key)
        return copy.deepcopy(value)

    def set(self, key: str, value: typing.Any, ttl_seconds: float | None = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._entries[key] = (copy.deepcopy(value), self._clock() + ttl)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def clear_expired(self) -> int:
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def stats(self) -> dict[str, typing.Any]:
        return {
            "name": self.name,
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "keys": list(self._entries.keys()),
        }

    async def get_or_compute(
        self,
        key: str,
        compute: typing.Callable[[], typing.Awaitable[T]],
        ttl_seconds: float | None = None,
    ) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = await compute()
        self.set(key, value, ttl_seconds=ttl_seconds)
        return value

    def __len__(self) -> int:
        return len(self._entries)


async def sweep_caches_forever(caches: typing.Sequence[TTLCache], interval_seconds: float) -> None:
    while True:
        await asyncio.sleep(interval_seconds)
        for cache in caches:
            removed = cache.clear_expired()
            if removed:
                logger.info("cache[%s] swept %s expired entries", cache.name, removed)


__all__ = ["TTLCache", "sweep_caches_forever"]
