from __future__ import annotations

from typing import Optional

from totpguard.domain.ports.cache import CachePort
from totpguard.domain.ports.user_store import UserStorePort


class TotpPhraseReader:
    """Cache-through read of a user's shared secret."""

    def __init__(self, user_store: UserStorePort, cache: CachePort) -> None:
        self._store = user_store
        self._cache = cache

    async def get_phrase(self, user_id: int) -> Optional[str]:
        cached = await self._cache.get(user_id)
        if cached:
            return cached

        phrase = await self._store.get_totp_phrase(user_id)
        # non-enrolled users are not cached so enrolment shows up at once
        if phrase:
            await self._cache.put(user_id, phrase)
        return phrase
