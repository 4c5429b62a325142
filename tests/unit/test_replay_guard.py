import pytest

from totpguard.application.replay_guard import CounterReplayGuard
from tests.fakes import USER_ID, FakeCache


@pytest.mark.asyncio
async def test_miss_never_short_circuits():
    guard = CounterReplayGuard(FakeCache())
    assert await guard.should_short_circuit(USER_ID, 0) is False
    assert await guard.should_short_circuit(USER_ID, 41) is False


@pytest.mark.asyncio
async def test_short_circuits_only_for_the_recorded_counter():
    guard = CounterReplayGuard(FakeCache())
    await guard.record_success(USER_ID, 41)

    assert await guard.should_short_circuit(USER_ID, 41) is True
    assert await guard.should_short_circuit(USER_ID, 40) is False
    assert await guard.should_short_circuit(USER_ID, 42) is False


@pytest.mark.asyncio
async def test_new_success_overwrites_stale_counter():
    cache = FakeCache()
    guard = CounterReplayGuard(cache)
    await guard.record_success(USER_ID, 41)
    await guard.record_success(USER_ID, 43)

    assert await guard.should_short_circuit(USER_ID, 41) is False
    assert await guard.should_short_circuit(USER_ID, 43) is True
    assert cache.store[USER_ID] == "43"


@pytest.mark.asyncio
async def test_entries_are_per_user():
    guard = CounterReplayGuard(FakeCache())
    await guard.record_success(1, 41)

    assert await guard.should_short_circuit(2, 41) is False


@pytest.mark.asyncio
async def test_garbage_cache_value_is_treated_as_miss():
    guard = CounterReplayGuard(FakeCache(initial={USER_ID: "not-a-number"}))
    assert await guard.should_short_circuit(USER_ID, 41) is False
