"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from line_bridge.config import DEFAULT_API_BASE_URL, LineSettings
from line_bridge.models import HandlerKind


@pytest.fixture
def line_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.setenv("LINE_BOT_CHANNEL_TOKEN", "token")
    monkeypatch.setenv("LINE_BOT_CHANNEL_SECRET", "secret")
    for name in ("LINE_BOT_PATH", "LINE_BOT_WEBHOOK_HANDLER", "LINE_API_BASE_URL", "AUDIT_LOG_PATH"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(line_env: pytest.MonkeyPatch) -> None:
    settings = LineSettings.from_env()
    assert settings.channel_token == "token"
    assert settings.channel_secret == "secret"
    assert settings.webhook_path == "line/webhook"
    assert settings.route == "/line/webhook"
    assert settings.webhook_handler is HandlerKind.DISPATCHER
    assert settings.api_base_url == DEFAULT_API_BASE_URL
    assert settings.audit_log_path is None


def test_overrides(line_env: pytest.MonkeyPatch) -> None:
    line_env.setenv("LINE_BOT_PATH", "/hooks/line/")
    line_env.setenv("LINE_BOT_WEBHOOK_HANDLER", "log")
    line_env.setenv("AUDIT_LOG_PATH", "/tmp/audit.jsonl")
    settings = LineSettings.from_env()
    assert settings.route == "/hooks/line"
    assert settings.webhook_handler is HandlerKind.LOG
    assert settings.audit_log_path == "/tmp/audit.jsonl"


def test_missing_secret_raises(line_env: pytest.MonkeyPatch) -> None:
    line_env.delenv("LINE_BOT_CHANNEL_SECRET")
    with pytest.raises(KeyError):
        LineSettings.from_env()


def test_unknown_handler_raises(line_env: pytest.MonkeyPatch) -> None:
    line_env.setenv("LINE_BOT_WEBHOOK_HANDLER", "queue")
    with pytest.raises(ValueError):
        LineSettings.from_env()


def test_empty_path_rejected() -> None:
    with pytest.raises(ValidationError):
        LineSettings(channel_token="t", channel_secret="s", webhook_path="/")


def test_settings_are_frozen() -> None:
    settings = LineSettings(channel_token="t", channel_secret="s")
    with pytest.raises(ValidationError):
        settings.channel_secret = "changed"  # type: ignore[misc]
