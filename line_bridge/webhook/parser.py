"""Event request parsing — raw webhook body to typed events."""

from __future__ import annotations

import json
from typing import Any, Protocol

from pydantic import ValidationError

from line_bridge.webhook.errors import InvalidEventRequestError
from line_bridge.webhook.events import CallbackRequest, Event, event_from_dict


class EventParser(Protocol):
    """Anything that turns a verified request body into events."""

    def parse(self, raw_body: bytes) -> list[Event]: ...


class EventRequestParser:
    """Parses the platform's ``{"destination": ..., "events": [...]}`` envelope."""

    def parse(self, raw_body: bytes) -> list[Event]:
        return self.parse_request(raw_body).events

    def parse_request(self, raw_body: bytes) -> CallbackRequest:
        try:
            payload: Any = json.loads(raw_body)
        except (ValueError, RecursionError) as exc:
            raise InvalidEventRequestError("body is not JSON") from exc

        if not isinstance(payload, dict):
            raise InvalidEventRequestError("root must be an object")

        raw_events = payload.get("events")
        if not isinstance(raw_events, list):
            raise InvalidEventRequestError("'events' must be an array")

        destination = payload.get("destination")
        if destination is not None and not isinstance(destination, str):
            raise InvalidEventRequestError("'destination' must be a string")

        events: list[Event] = []
        for index, raw in enumerate(raw_events):
            if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
                raise InvalidEventRequestError(f"event {index} has no type")
            try:
                events.append(event_from_dict(raw))
            except ValidationError as exc:
                raise InvalidEventRequestError(
                    f"event {index} ({raw['type']}): {exc.error_count()} validation error(s)"
                ) from exc

        return CallbackRequest(destination=destination, events=events)
