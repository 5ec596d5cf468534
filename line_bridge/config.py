"""Process configuration, read once from environment variables."""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, field_validator

from line_bridge.models import HandlerKind

DEFAULT_API_BASE_URL = "https://api.line.me"
DEFAULT_WEBHOOK_PATH = "line/webhook"


class LineSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel_token: str
    channel_secret: str
    webhook_path: str = DEFAULT_WEBHOOK_PATH
    webhook_handler: HandlerKind = HandlerKind.DISPATCHER
    api_base_url: str = DEFAULT_API_BASE_URL
    audit_log_path: str | None = None

    @field_validator("webhook_path")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        path = value.strip("/")
        if not path:
            raise ValueError("webhook path must not be empty")
        return path

    @property
    def route(self) -> str:
        return f"/{self.webhook_path}"

    @classmethod
    def from_env(cls) -> LineSettings:
        """Build settings from LINE_BOT_* variables.

        LINE_BOT_CHANNEL_TOKEN and LINE_BOT_CHANNEL_SECRET are required.
        """
        return cls(
            channel_token=os.environ["LINE_BOT_CHANNEL_TOKEN"],
            channel_secret=os.environ["LINE_BOT_CHANNEL_SECRET"],
            webhook_path=os.environ.get("LINE_BOT_PATH", DEFAULT_WEBHOOK_PATH),
            webhook_handler=HandlerKind(
                os.environ.get("LINE_BOT_WEBHOOK_HANDLER", HandlerKind.DISPATCHER.value),
            ),
            api_base_url=os.environ.get("LINE_API_BASE_URL", DEFAULT_API_BASE_URL),
            audit_log_path=os.environ.get("AUDIT_LOG_PATH"),
        )
