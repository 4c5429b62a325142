import pytest

from totpguard.application.authenticate import TotpAuthenticator
from tests.fakes import CLIENT_IP, SECRET, USER_ID, FakeCache, FakeUserStore


@pytest.fixture()
def user_store():
    return FakeUserStore(
        phrases={USER_ID: SECRET},
        ip_rules={USER_ID: [CLIENT_IP]},
    )


@pytest.fixture()
def ip_cache():
    return FakeCache("ip-cache")


@pytest.fixture()
def counter_cache():
    return FakeCache("totp-counter-cache")


@pytest.fixture()
def phrase_cache():
    return FakeCache("totp-phrase-cache")


@pytest.fixture()
def authenticator(user_store, ip_cache, counter_cache, phrase_cache):
    return TotpAuthenticator(
        user_store=user_store,
        ip_cache=ip_cache,
        counter_cache=counter_cache,
        phrase_cache=phrase_cache,
    )
