from typing import Optional, Protocol


class CachePort(Protocol):
    """
    Named key/value cache. Expiry and eviction belong to the implementation;
    a miss is always allowed.
    """

    name: str

    async def get(self, key: int) -> Optional[str]:
        """Return the cached value or None on a miss."""

    async def put(self, key: int, value: str) -> None:
        """Store/replace the value for key."""
