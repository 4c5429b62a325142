import pytest
from fastapi.testclient import TestClient

from totpguard.application.authenticate import TotpAuthenticator
from totpguard.main import create_app
from totpguard.presentation.dependencies import (
    get_auth_enabled,
    get_authenticator,
    get_totp_step_seconds,
    get_user_store,
)
from tests.fakes import SECRET, FakeCache, FakeUserStore

# TestClient connects from this host
TEST_CLIENT_IP = "testclient"
PUBLIC_UUID = "p" * 48
API_KEY = "A1" * 24
USER_ID = 11
NOW = 59.0


@pytest.fixture()
def app_and_deps():
    app = create_app()
    store = FakeUserStore(
        ids_by_uuid={PUBLIC_UUID: USER_ID},
        ids_by_api_key={API_KEY: USER_ID},
        phrases={USER_ID: SECRET},
        ip_rules={USER_ID: [TEST_CLIENT_IP]},
    )
    caches = {
        "ip": FakeCache("ip-cache"),
        "counter": FakeCache("totp-counter-cache"),
        "phrase": FakeCache("totp-phrase-cache"),
    }
    config = {"auth_enabled": True}

    def _get_authenticator():
        return TotpAuthenticator(
            user_store=store,
            ip_cache=caches["ip"],
            counter_cache=caches["counter"],
            phrase_cache=caches["phrase"],
            clock=lambda: NOW,
        )

    app.dependency_overrides[get_user_store] = lambda: store
    app.dependency_overrides[get_authenticator] = _get_authenticator
    app.dependency_overrides[get_auth_enabled] = lambda: config["auth_enabled"]
    app.dependency_overrides[get_totp_step_seconds] = lambda: 30

    try:
        yield app, store, caches, config
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app, _, _, _ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)
