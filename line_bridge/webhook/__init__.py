"""Webhook pipeline for line-bridge.

This module provides inbound webhook handling including:
- Signature verification
- Event request parsing
- Handler variants (event dispatch, logging, no-op)
- Endpoint orchestration
"""

from line_bridge.webhook.endpoint import WebhookEndpoint
from line_bridge.webhook.errors import (
    InvalidEventRequestError,
    InvalidSignatureError,
    MissingSignatureError,
    WebhookRequestError,
)
from line_bridge.webhook.handlers import (
    WebhookEventDispatcher,
    WebhookHandler,
    WebhookLogHandler,
    WebhookNullHandler,
    create_handler,
)
from line_bridge.webhook.models import WebhookRequest, WebhookResponse
from line_bridge.webhook.parser import EventParser, EventRequestParser
from line_bridge.webhook.signature import SIGNATURE_HEADER, SignatureVerifier, sign, verify

__all__ = [
    # Exceptions
    "InvalidEventRequestError",
    "InvalidSignatureError",
    "MissingSignatureError",
    "WebhookRequestError",
    # Components
    "EventParser",
    "EventRequestParser",
    "SignatureVerifier",
    "WebhookEndpoint",
    "WebhookEventDispatcher",
    "WebhookHandler",
    "WebhookLogHandler",
    "WebhookNullHandler",
    "create_handler",
    # Signature helpers
    "SIGNATURE_HEADER",
    "sign",
    "verify",
    # Models
    "WebhookRequest",
    "WebhookResponse",
]
