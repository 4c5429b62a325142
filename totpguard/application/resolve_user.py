from totpguard.domain.entities import UNRESOLVED_USER_ID
from totpguard.domain.identifiers import sanitize_key
from totpguard.domain.ports.user_store import UserStorePort


async def resolve_user_id_from_public_uuid(store: UserStorePort, key: str) -> int:
    key = sanitize_key(key)
    if not key:
        return UNRESOLVED_USER_ID
    user_id = await store.find_id_by_public_uuid(key)
    return UNRESOLVED_USER_ID if user_id is None else user_id


async def resolve_user_id_from_api_key(store: UserStorePort, key: str) -> int:
    key = sanitize_key(key)
    if not key:
        return UNRESOLVED_USER_ID
    user_id = await store.find_id_by_api_key(key)
    return UNRESOLVED_USER_ID if user_id is None else user_id
