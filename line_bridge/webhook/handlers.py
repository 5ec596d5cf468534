"""Webhook handlers — interchangeable strategies for a parsed event batch.

Each handler returns its own label; the endpoint echoes it in the 200
response so the active variant is observable.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from line_bridge.bus.event_bus import EventBus, get_event_bus
from line_bridge.models import HandlerKind
from line_bridge.webhook.events import Event, ReplyableEvent

logger = logging.getLogger(__name__)


class WebhookHandler(Protocol):
    async def handle(self, events: Sequence[Event]) -> str: ...


class WebhookNullHandler:
    """Accepts the batch and does nothing with it."""

    label = "WebhookNullHandler"

    async def handle(self, events: Sequence[Event]) -> str:
        return self.label


class WebhookLogHandler:
    """Writes one log line per event."""

    label = "WebhookLogHandler"

    async def handle(self, events: Sequence[Event]) -> str:
        for event in events:
            source_type, source_id = _source_fields(event)
            logger.info(
                "webhook event type=%s source_type=%s source_id=%s "
                "webhook_event_id=%s reply_token=%s",
                event.type,
                source_type,
                source_id,
                event.webhook_event_id,
                isinstance(event, ReplyableEvent) and event.reply_token is not None,
            )
        return self.label


class WebhookEventDispatcher:
    """Publishes each event on the event bus, keyed by its concrete class."""

    label = "WebhookEventDispatcher"

    def __init__(self, bus: EventBus | None = None) -> None:
        self._bus = bus or get_event_bus()

    async def handle(self, events: Sequence[Event]) -> str:
        for event in events:
            failures = await self._bus.publish(event)
            if failures:
                logger.warning(
                    "%d listener(s) failed for %s", len(failures), type(event).__name__,
                )
        return self.label


def create_handler(kind: HandlerKind | str, bus: EventBus | None = None) -> WebhookHandler:
    """Build the handler selected by configuration."""
    kind = HandlerKind(kind)
    if kind is HandlerKind.NULL:
        return WebhookNullHandler()
    if kind is HandlerKind.LOG:
        return WebhookLogHandler()
    return WebhookEventDispatcher(bus)


def _source_fields(event: Event) -> tuple[str | None, str | None]:
    source = event.source
    if source is None:
        return None, None
    if isinstance(source, dict):
        # unknown event kinds keep the source as received
        return source.get("type"), None
    return source.type, source.id
