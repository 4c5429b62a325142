from __future__ import annotations

import logging

from totpguard.domain.entities import BLOCKED_IP_ADDRESS
from totpguard.domain.ports.cache import CachePort
from totpguard.domain.ports.user_store import UserStorePort

logger = logging.getLogger(__name__)


class IpAllowList:
    def __init__(self, user_store: UserStorePort, cache: CachePort) -> None:
        self._store = user_store
        self._cache = cache

    async def validate_ip(self, user_id: int, candidate_ip: str) -> bool:
        """
        Check that the user may log in from candidate_ip.

        A cached BLOCKED entry denies and a cached exact match allows, both
        without touching the store. Anything else re-runs the store check and
        overwrites the cache entry with the outcome.
        """
        cached = await self._cache.get(user_id)
        if cached == BLOCKED_IP_ADDRESS:
            return False
        if cached is not None and cached == candidate_ip:
            return True

        count = await self._store.count_ip_matches(user_id, candidate_ip)
        valid = count > 0
        await self._cache.put(user_id, candidate_ip if valid else BLOCKED_IP_ADDRESS)

        if not valid:
            logger.info(
                "ip address not allowed",
                extra={"user_id": user_id, "ip": candidate_ip},
            )
        return valid
