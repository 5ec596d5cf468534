"""Bot client — entry point for outgoing Messaging API calls.

Extensions registered with :meth:`BotClient.extend` take precedence over
API operations of the same name when resolved through :meth:`BotClient.call`.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

from line_bridge.config import LineSettings
from line_bridge.messaging.client import MessagingApiClient
from line_bridge.messaging.reply import ReplyMessage

logger = logging.getLogger(__name__)

Extension = Callable[..., Any]


class UnknownOperationError(Exception):
    """Raised when neither an extension nor an API operation has the name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown bot operation: {name}")


class BotClient:
    def __init__(self, api: MessagingApiClient | Callable[[], MessagingApiClient]) -> None:
        self._api = api
        self._extensions: dict[str, Extension] = {}

    @classmethod
    def from_settings(cls, settings: LineSettings) -> BotClient:
        return cls(MessagingApiClient.from_settings(settings))

    def bot_using(self, api: MessagingApiClient | Callable[[], MessagingApiClient]) -> BotClient:
        """Swap the API client; a zero-arg callable is resolved on each use."""
        self._api = api
        return self

    def bot(self) -> MessagingApiClient:
        if isinstance(self._api, MessagingApiClient):
            return self._api
        return self._api()

    def reply(self, reply_token: str) -> ReplyMessage:
        return ReplyMessage(self.bot(), reply_token)

    def extend(self, name: str, fn: Extension) -> None:
        """Register ``fn(bot_client, *args, **kwargs)`` under ``name``."""
        if name.startswith("_"):
            raise ValueError(f"Extension name must be public: {name}")
        self._extensions[name] = fn
        logger.debug("Registered bot extension %s", name)

    def has_extension(self, name: str) -> bool:
        return name in self._extensions

    async def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        if name in self._extensions:
            result = self._extensions[name](self, *args, **kwargs)
        else:
            operation = None if name.startswith("_") else getattr(self.bot(), name, None)
            if not callable(operation):
                raise UnknownOperationError(name)
            result = operation(*args, **kwargs)
        if inspect.isawaitable(result):
            return await result
        return result
