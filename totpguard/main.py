from contextlib import asynccontextmanager

from fastapi import FastAPI

from totpguard.infrastructure.db.pool import close_pool, get_pool
from totpguard.infrastructure.redis_cache.pool import close_redis, get_redis
from totpguard.logging import setup_logging
from totpguard.presentation.api import api
from totpguard.settings import get_settings

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    pool = get_pool()
    await pool.open()
    get_redis()

    try:
        yield
    finally:
        # shutdown
        await close_redis()
        await close_pool()


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="TOTP Auth API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(api)
    return app


app = create_app()
