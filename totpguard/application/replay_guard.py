from __future__ import annotations

from totpguard.domain.ports.cache import CachePort


class CounterReplayGuard:
    """
    Remembers the counter at which each user last authenticated. Only
    successes are recorded; a miss never denies, it just means full
    verification has to run.
    """

    def __init__(self, cache: CachePort) -> None:
        self._cache = cache

    async def should_short_circuit(self, user_id: int, counter: int) -> bool:
        cached = await self._cache.get(user_id)
        if cached is None:
            return False
        try:
            return int(cached) == counter
        except ValueError:
            return False

    async def record_success(self, user_id: int, counter: int) -> None:
        await self._cache.put(user_id, str(counter))
