"""Webhook endpoint — verify, parse, dispatch.

Stages:
1. Verify the signature header against the raw body
2. Parse the body into typed events
3. Hand the batch to the configured handler

A failure in stage 1 or 2 is terminal for the request and answers 400.
Nothing is retried here; the platform redelivers on its own schedule.
"""

from __future__ import annotations

import logging
from typing import Protocol

from line_bridge.audit.logger import AuditLogger
from line_bridge.models import AuditEvent, AuditEventType, RiskLevel
from line_bridge.webhook.errors import (
    InvalidEventRequestError,
    MissingSignatureError,
    WebhookRequestError,
)
from line_bridge.webhook.handlers import WebhookHandler
from line_bridge.webhook.models import WebhookRequest, WebhookResponse
from line_bridge.webhook.parser import EventParser
from line_bridge.webhook.signature import SIGNATURE_HEADER

logger = logging.getLogger(__name__)

_REJECTION_AUDIT_TYPES: dict[type[WebhookRequestError], AuditEventType] = {
    MissingSignatureError: AuditEventType.SIGNATURE_MISSING,
    InvalidEventRequestError: AuditEventType.EVENT_REQUEST_INVALID,
}


class Verifier(Protocol):
    def verify(self, raw_body: bytes, signature_header: str | None) -> None: ...


class WebhookEndpoint:
    """Stateless orchestration of one webhook request."""

    def __init__(
        self,
        verifier: Verifier,
        parser: EventParser,
        handler: WebhookHandler,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self._verifier = verifier
        self._parser = parser
        self._handler = handler
        self._audit = audit_logger

    async def handle(self, request: WebhookRequest) -> WebhookResponse:
        try:
            # Stage 1: signature
            self._verifier.verify(request.body, request.header(SIGNATURE_HEADER))
            # Stage 2: events
            events = self._parser.parse(request.body)
        except WebhookRequestError as exc:
            logger.info("Rejected webhook on %s: %s", request.path or "/", exc)
            self._audit_rejection(request, exc)
            return WebhookResponse(status_code=400, message=exc.message)

        # Stage 3: dispatch
        label = await self._handler.handle(events)

        if self._audit:
            self._audit.log(AuditEvent(
                event_type=AuditEventType.WEBHOOK_HANDLED,
                source_ip=request.source_ip,
                action=f"POST {request.path}",
                result="success",
                risk_level=RiskLevel.INFO,
                details={"handler": label, "events": len(events)},
            ))
        return WebhookResponse(status_code=200, text=label)

    def _audit_rejection(self, request: WebhookRequest, exc: WebhookRequestError) -> None:
        if not self._audit:
            return
        event_type = _REJECTION_AUDIT_TYPES.get(type(exc), AuditEventType.SIGNATURE_INVALID)
        risk = (
            RiskLevel.LOW if event_type is AuditEventType.EVENT_REQUEST_INVALID else RiskLevel.HIGH
        )
        self._audit.log(AuditEvent(
            event_type=event_type,
            source_ip=request.source_ip,
            action=f"POST {request.path}",
            result="rejected",
            risk_level=risk,
            details={"reason": exc.message, "detail": exc.detail},
        ))
