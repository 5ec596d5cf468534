"""Shared test fixtures for line-bridge."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from line_bridge.audit.logger import AuditLogger
from line_bridge.config import LineSettings
from line_bridge.models import AuditEvent, AuditEventType, RiskLevel

CHANNEL_SECRET = "s3cr3t"
CHANNEL_TOKEN = "test-channel-token"


@pytest.fixture
def mock_audit_logger() -> MagicMock:
    return MagicMock(spec=AuditLogger)


@pytest.fixture
def settings() -> LineSettings:
    return LineSettings(channel_token=CHANNEL_TOKEN, channel_secret=CHANNEL_SECRET)


# --- Factory functions for test data ---


def make_audit_event(**kwargs: Any) -> AuditEvent:
    """Factory for AuditEvent with sensible defaults."""
    defaults: dict[str, Any] = {
        "event_type": AuditEventType.SIGNATURE_INVALID,
        "action": "POST /line/webhook",
        "result": "rejected",
        "risk_level": RiskLevel.HIGH,
    }
    defaults.update(kwargs)
    return AuditEvent(**defaults)


def make_message_event(**kwargs: Any) -> dict[str, Any]:
    """Wire-format text message event."""
    event: dict[str, Any] = {
        "replyToken": "0f3779fba3b349968c5d07db31eab56f",
        "type": "message",
        "mode": "active",
        "timestamp": 1462629479859,
        "source": {"type": "user", "userId": "U4af4980629"},
        "webhookEventId": "01FZ74A0TDDPYRVKNK77XKC3ZR",
        "deliveryContext": {"isRedelivery": False},
        "message": {"id": "444573844083572737", "type": "text", "text": "test"},
    }
    event.update(kwargs)
    return event


def make_follow_event(**kwargs: Any) -> dict[str, Any]:
    event: dict[str, Any] = {
        "replyToken": "85cbe770fa8b4f45bbe077b1d4be4a36",
        "type": "follow",
        "mode": "active",
        "timestamp": 1462629479860,
        "source": {"type": "user", "userId": "U4af4980630"},
    }
    event.update(kwargs)
    return event


def make_callback_body(*events: dict[str, Any], destination: str = "Uxxxxxxxx") -> bytes:
    return json.dumps({"destination": destination, "events": list(events)}).encode()
