"""Fluent builder for replying to a webhook event."""

from __future__ import annotations

from typing import TYPE_CHECKING

from line_bridge.messaging.models import (
    Message,
    QuickReply,
    ReplyMessageRequest,
    SendMessageResponse,
    Sender,
    StickerMessage,
    TextMessage,
)

if TYPE_CHECKING:
    from line_bridge.messaging.client import MessagingApiClient


class ReplyAlreadySentError(Exception):
    """Raised when a reply builder is sent a second time."""

    def __init__(self, reply_token: str) -> None:
        self.reply_token = reply_token
        super().__init__(f"Reply token already used: {reply_token}")


class ReplyMessage:
    """Collects decorations for one reply token and sends exactly once.

    ``text``, ``sticker`` and ``message`` are terminal: each sends the
    batch through the API client. Quick reply and sender apply to every
    message in the batch that does not carry its own.
    """

    def __init__(self, api: MessagingApiClient, reply_token: str) -> None:
        self._api = api
        self._reply_token = reply_token
        self._quick_reply: QuickReply | None = None
        self._sender: Sender | None = None
        self._notification_disabled = False
        self._sent = False

    @property
    def reply_token(self) -> str:
        return self._reply_token

    @property
    def sent(self) -> bool:
        return self._sent

    def with_quick_reply(self, quick_reply: QuickReply) -> ReplyMessage:
        self._quick_reply = quick_reply
        return self

    def with_sender(self, name: str | None = None, icon_url: str | None = None) -> ReplyMessage:
        self._sender = Sender(name=name, icon_url=icon_url)
        return self

    def with_notification_disabled(self, disabled: bool = True) -> ReplyMessage:
        self._notification_disabled = disabled
        return self

    async def text(self, *texts: str) -> SendMessageResponse:
        return await self.message(*(TextMessage(text=text) for text in texts))

    async def sticker(self, package_id: int | str, sticker_id: int | str) -> SendMessageResponse:
        return await self.message(
            StickerMessage(package_id=str(package_id), sticker_id=str(sticker_id)),
        )

    async def message(self, *messages: Message) -> SendMessageResponse:
        if self._sent:
            raise ReplyAlreadySentError(self._reply_token)
        request = ReplyMessageRequest(
            reply_token=self._reply_token,
            messages=[self._decorate(m) for m in messages],
            notification_disabled=self._notification_disabled,
        )
        # The token is spent once the call is attempted, even if it fails
        self._sent = True
        return await self._api.reply_message(request)

    def _decorate(self, message: Message) -> Message:
        update: dict[str, object] = {}
        if self._quick_reply is not None and message.quick_reply is None:
            update["quick_reply"] = self._quick_reply
        if self._sender is not None and message.sender is None:
            update["sender"] = self._sender
        return message.model_copy(update=update) if update else message
