from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from totpguard.domain.errors import BackendUnavailable
from totpguard.domain.ports.cache import CachePort

IP_CACHE = "ip-cache"
TOTP_COUNTER_CACHE = "totp-counter-cache"
TOTP_PHRASE_CACHE = "totp-phrase-cache"


class RedisCache(CachePort):
    """
    One logical cache living under its own key prefix. Every put refreshes the
    TTL; concurrent writers for the same user simply overwrite each other.
    """

    def __init__(self, redis: Redis, name: str, *, ttl_seconds: int) -> None:
        self._redis = redis
        self.name = name
        self._ttl = ttl_seconds

    def _key(self, key: int) -> str:
        return f"{self.name}:{key}"

    async def get(self, key: int) -> Optional[str]:
        try:
            return await self._redis.get(self._key(key))
        except RedisError as exc:
            raise BackendUnavailable(self.name) from exc

    async def put(self, key: int, value: str) -> None:
        try:
            await self._redis.set(self._key(key), value, ex=self._ttl)
        except RedisError as exc:
            raise BackendUnavailable(self.name) from exc
