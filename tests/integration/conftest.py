# tests/integration/conftest.py
import os

import pytest
import pytest_asyncio
from redis.asyncio import Redis

# these talk to real Redis/Postgres (docker compose services)
RUN_INTEGRATION = os.environ.get("RUN_INTEGRATION") == "1"


def pytest_collection_modifyitems(config, items):
    if RUN_INTEGRATION:
        return
    skip = pytest.mark.skip(reason="set RUN_INTEGRATION=1 to run")
    for item in items:
        if "tests/integration/" in item.nodeid:
            item.add_marker(skip)


@pytest_asyncio.fixture
async def redis_client():
    url = os.environ.get("REDIS_URL", "redis://redis:6379/0")
    r = Redis.from_url(url, encoding="utf-8", decode_responses=True)
    try:
        yield r
    finally:
        await r.aclose()
