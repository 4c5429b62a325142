from fastapi import Depends

from totpguard.application.authenticate import TotpAuthenticator
from totpguard.domain.ports.cache import CachePort
from totpguard.domain.ports.user_store import UserStorePort
from totpguard.infrastructure.db.pool import get_pool
from totpguard.infrastructure.db.user_store import PgUserStore
from totpguard.infrastructure.redis_cache.cache import (
    IP_CACHE,
    TOTP_COUNTER_CACHE,
    TOTP_PHRASE_CACHE,
    RedisCache,
)
from totpguard.infrastructure.redis_cache.pool import get_redis
from totpguard.settings import get_settings


def get_user_store() -> UserStorePort:
    return PgUserStore(get_pool())


def get_ip_cache() -> CachePort:
    return RedisCache(
        get_redis(), IP_CACHE, ttl_seconds=get_settings().ip_cache_ttl_seconds
    )


def get_counter_cache() -> CachePort:
    return RedisCache(
        get_redis(),
        TOTP_COUNTER_CACHE,
        ttl_seconds=get_settings().totp_counter_cache_ttl_seconds,
    )


def get_phrase_cache() -> CachePort:
    return RedisCache(
        get_redis(),
        TOTP_PHRASE_CACHE,
        ttl_seconds=get_settings().totp_phrase_cache_ttl_seconds,
    )


def get_authenticator(
    user_store: UserStorePort = Depends(get_user_store),
    ip_cache: CachePort = Depends(get_ip_cache),
    counter_cache: CachePort = Depends(get_counter_cache),
    phrase_cache: CachePort = Depends(get_phrase_cache),
) -> TotpAuthenticator:
    settings = get_settings()
    return TotpAuthenticator(
        user_store=user_store,
        ip_cache=ip_cache,
        counter_cache=counter_cache,
        phrase_cache=phrase_cache,
        epoch_seconds=settings.totp_epoch_seconds,
        digits=settings.totp_digits,
        skew_window=settings.totp_skew_window,
    )


def get_auth_enabled() -> bool:
    return get_settings().totp_auth_enabled


def get_totp_step_seconds() -> int:
    return get_settings().totp_step_seconds
