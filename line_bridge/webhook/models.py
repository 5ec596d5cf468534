"""Value objects passed through the webhook endpoint."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class WebhookRequest:
    """Raw inbound request. Header names are stored lower-cased."""

    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)
    path: str = ""
    source_ip: str | None = None

    def __post_init__(self) -> None:
        normalized = {k.lower(): v for k, v in self.headers.items()}
        object.__setattr__(self, "headers", MappingProxyType(normalized))

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


@dataclass
class WebhookResponse:
    """Endpoint outcome. ``message`` is set for rejections, ``text`` on success."""

    status_code: int
    text: str = ""
    message: str | None = None

    @property
    def is_error(self) -> bool:
        return self.message is not None
