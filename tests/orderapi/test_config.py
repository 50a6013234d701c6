"""Software-only simulation / demo - no real systems will be contacted or modified."""
import logging

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from orderapi.app import build_token_gate, create_app
from orderapi.config import Settings, get_settings
from orderapi.logging_config import setup_logging


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.token_limit == 5
    assert settings.token_window_seconds == 3600
    assert settings.token_usage_limit == 5
    assert settings.token_expiry_margin_seconds == 5
    assert settings.redact_inactive_token is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TOKEN_USAGE_LIMIT", "2")
    monkeypatch.setenv("REDACT_INACTIVE_TOKEN", "true")
    settings = get_settings()
    assert settings.token_usage_limit == 2
    assert settings.redact_inactive_token is True


def test_gate_built_from_settings(clock):
    gate = build_token_gate(Settings(_env_file=None, token_limit=3, token_window_seconds=60), clock)
    assert gate.limits.token_limit == 3
    assert gate.issue_token().expires_in == 55


def test_usage_limit_setting_reaches_orders_route(clock):
    settings = Settings(_env_file=None, token_usage_limit=2)
    client = TestClient(create_app(settings=settings, clock=clock))
    token = client.post("/get-token").json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}
    assert client.get("/orders", headers=headers).status_code == 200
    assert client.get("/orders", headers=headers).status_code == 200
    assert client.get("/orders", headers=headers).status_code == 403


def test_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", " warn ")
    assert get_settings().log_level == "WARNING"
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="verbose")


def test_setup_logging_applies_level():
    setup_logging("ERROR")
    assert logging.getLogger("orderapi").level == logging.ERROR
    setup_logging("INFO")
    assert logging.getLogger("orderapi").level == logging.INFO
