from __future__ import annotations

from typing import Optional, Protocol


class UserStorePort(Protocol):
    async def find_id_by_public_uuid(self, uuid: str) -> Optional[int]:
        """Return the user id owning this public uuid, or None."""

    async def find_id_by_api_key(self, key: str) -> Optional[int]:
        """Return the user id owning this API key, or None."""

    async def get_totp_phrase(self, user_id: int) -> Optional[str]:
        """Return the user's TOTP shared secret, or None if not enrolled."""

    async def count_ip_matches(self, user_id: int, candidate_ip: str) -> int:
        """
        Count the user's registered addresses that are the wildcard '*'
        or pattern-match candidate_ip (pattern rules are the store's).
        """
