from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 5.0
    db_connect_timeout_seconds: int = 3
    redis_socket_timeout_seconds: float = 2.0

    # TOTP
    totp_auth_enabled: bool = True
    totp_step_seconds: int = 30
    totp_epoch_seconds: int = 0
    totp_digits: int = 6
    totp_skew_window: int = 0

    # Cache TTLs
    ip_cache_ttl_seconds: int = 300
    totp_counter_cache_ttl_seconds: int = 120
    totp_phrase_cache_ttl_seconds: int = 600

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
