"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import itertools

import pytest
from fastapi.testclient import TestClient

from orderapi.app import create_app
from orderapi.config import Settings, get_settings
from orderapi.utils.clock import ManualClock
from orderapi.utils.token_gate import TokenGate, TokenLimits


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for key in ("TOKEN_LIMIT", "TOKEN_WINDOW_SECONDS", "TOKEN_USAGE_LIMIT", "TOKEN_EXPIRY_MARGIN_SECONDS", "REDACT_INACTIVE_TOKEN", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def token_factory():
    counter = itertools.count(1)
    return lambda: f"token-{next(counter)}"


@pytest.fixture()
def gate(clock: ManualClock, token_factory) -> TokenGate:
    return TokenGate(limits=TokenLimits(), clock=clock, token_factory=token_factory)


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture()
def client(settings: Settings, clock: ManualClock) -> TestClient:
    return TestClient(create_app(settings=settings, clock=clock))


@pytest.fixture()
def access_token(client: TestClient) -> str:
    response = client.post("/get-token")
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest.fixture()
def auth_headers(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}
