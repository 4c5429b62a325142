from __future__ import annotations

from typing import Any, Optional

import psycopg
from psycopg_pool import AsyncConnectionPool

from totpguard.domain.errors import BackendUnavailable
from totpguard.domain.ports.user_store import UserStorePort

USER_ID_FROM_PUBLIC_UUID_SQL = (
    "SELECT persons.id FROM persons WHERE persons.public_uuid = %s"
)

USER_ID_FROM_API_KEY_SQL = "SELECT persons.id FROM persons WHERE persons.api_key = %s"

TOTP_PHRASE_SQL = "SELECT persons.totp_phrase FROM persons WHERE persons.id = %s"

VALIDATE_IP_SQL = """
SELECT COUNT(login_ip_address.id)
FROM login_ip_address
WHERE login_ip_address.person_id = %s
  AND (login_ip_address.ip_address = '*' OR login_ip_address.ip_address LIKE %s)
"""


class PgUserStore(UserStorePort):
    """
    Postgres implementation of UserStorePort.

    NOTE:
    - Read only; every call borrows its own connection from the pool.
    - Any psycopg failure (including pool timeouts) is raised as
      BackendUnavailable.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def _scalar(self, sql: str, params: tuple) -> Any:
        try:
            async with self._pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(sql, params)
                    row = await cur.fetchone()
        except psycopg.Error as exc:
            raise BackendUnavailable("user-store") from exc
        return row[0] if row else None

    async def find_id_by_public_uuid(self, uuid: str) -> Optional[int]:
        return await self._scalar(USER_ID_FROM_PUBLIC_UUID_SQL, (uuid,))

    async def find_id_by_api_key(self, key: str) -> Optional[int]:
        return await self._scalar(USER_ID_FROM_API_KEY_SQL, (key,))

    async def get_totp_phrase(self, user_id: int) -> Optional[str]:
        return await self._scalar(TOTP_PHRASE_SQL, (user_id,))

    async def count_ip_matches(self, user_id: int, candidate_ip: str) -> int:
        count = await self._scalar(VALIDATE_IP_SQL, (user_id, candidate_ip))
        return int(count or 0)
