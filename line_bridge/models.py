"""Shared Pydantic data models for line-bridge."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

# --- Enums ---


class HandlerKind(str, Enum):
    DISPATCHER = "dispatcher"
    LOG = "log"
    NULL = "null"


class AuditEventType(str, Enum):
    SIGNATURE_MISSING = "signature_missing"
    SIGNATURE_INVALID = "signature_invalid"
    EVENT_REQUEST_INVALID = "event_request_invalid"
    WEBHOOK_HANDLED = "webhook_handled"
    LISTENER_FAILURE = "listener_failure"


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


# --- Audit Models ---


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class AuditEvent(BaseModel):
    timestamp: str = Field(default_factory=_now_iso)
    event_type: AuditEventType
    source_ip: str | None = None
    action: str
    result: str  # "success" | "failure" | "rejected"
    risk_level: RiskLevel
    details: dict[str, object] | None = None
