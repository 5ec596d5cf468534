"""In-process event bus — listeners subscribe per event class.

Listeners run in registration order. A failing listener is logged and
skipped; it never stops the remaining listeners or later publishes.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from line_bridge.audit.logger import AuditLogger
from line_bridge.models import AuditEvent, AuditEventType, RiskLevel

logger = logging.getLogger(__name__)

E = TypeVar("E")
Listener = Callable[[Any], Awaitable[None] | None]


class EventBus:
    """Registry mapping an event class to its ordered listeners."""

    def __init__(self, audit_logger: AuditLogger | None = None) -> None:
        self._listeners: dict[type, list[Listener]] = {}
        self._audit = audit_logger

    def subscribe(
        self, event_cls: type[E], listener: Listener | None = None,
    ) -> Listener | Callable[[Listener], Listener]:
        """Register ``listener`` for ``event_cls``; usable as a decorator."""

        def register(fn: Listener) -> Listener:
            self._listeners.setdefault(event_cls, []).append(fn)
            logger.debug("Subscribed %s to %s", _name(fn), event_cls.__name__)
            return fn

        if listener is not None:
            return register(listener)
        return register

    def unsubscribe(self, event_cls: type, listener: Listener) -> None:
        listeners = self._listeners.get(event_cls, [])
        if listener in listeners:
            listeners.remove(listener)

    def listeners(self, event_cls: type) -> list[Listener]:
        return list(self._listeners.get(event_cls, []))

    def clear(self) -> None:
        self._listeners.clear()

    async def publish(self, event: object) -> list[Exception]:
        """Deliver ``event`` to the listeners of its exact class.

        Returns the exceptions raised by listeners, already logged.
        """
        failures: list[Exception] = []
        for listener in self.listeners(type(event)):
            try:
                result = listener(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                logger.exception(
                    "Listener %s failed for %s", _name(listener), type(event).__name__,
                )
                self._record_failure(listener, event, exc)
                failures.append(exc)
        return failures

    def _record_failure(self, listener: Listener, event: object, exc: Exception) -> None:
        if not self._audit:
            return
        self._audit.log(AuditEvent(
            event_type=AuditEventType.LISTENER_FAILURE,
            action=f"dispatch {type(event).__name__}",
            result="failure",
            risk_level=RiskLevel.MEDIUM,
            details={"listener": _name(listener), "error": repr(exc)},
        ))


def _name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", repr(fn))


_default_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Return the process-wide bus, creating it on first use."""
    global _default_bus
    if _default_bus is None:
        _default_bus = EventBus()
    return _default_bus
