"""Messaging API payloads: outgoing messages, request envelopes and responses."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny
from pydantic.alias_generators import to_camel

_API_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class ApiModel(BaseModel):
    model_config = _API_CONFIG

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Message decorations ---


class QuickReplyItem(ApiModel):
    type: Literal["action"] = "action"
    image_url: str | None = None
    action: dict[str, Any]


class QuickReply(ApiModel):
    items: list[QuickReplyItem] = Field(max_length=13)


class Sender(ApiModel):
    name: str | None = None
    icon_url: str | None = None


# --- Messages ---


class Message(ApiModel):
    type: str
    quick_reply: QuickReply | None = None
    sender: Sender | None = None


class TextMessage(Message):
    type: Literal["text"] = "text"
    text: str
    quote_token: str | None = None


class StickerMessage(Message):
    type: Literal["sticker"] = "sticker"
    package_id: str
    sticker_id: str
    quote_token: str | None = None


class ImageMessage(Message):
    type: Literal["image"] = "image"
    original_content_url: str
    preview_image_url: str


class LocationMessage(Message):
    type: Literal["location"] = "location"
    title: str
    address: str
    latitude: float
    longitude: float


# --- Requests ---


class ReplyMessageRequest(ApiModel):
    reply_token: str
    messages: list[SerializeAsAny[Message]] = Field(min_length=1, max_length=5)
    notification_disabled: bool = False


class PushMessageRequest(ApiModel):
    to: str
    messages: list[SerializeAsAny[Message]] = Field(min_length=1, max_length=5)
    notification_disabled: bool = False


class MulticastRequest(ApiModel):
    to: list[str] = Field(min_length=1, max_length=500)
    messages: list[SerializeAsAny[Message]] = Field(min_length=1, max_length=5)
    notification_disabled: bool = False


class BroadcastRequest(ApiModel):
    messages: list[SerializeAsAny[Message]] = Field(min_length=1, max_length=5)
    notification_disabled: bool = False


# --- Responses ---


class SentMessage(ApiModel):
    id: str
    quote_token: str | None = None


class SendMessageResponse(ApiModel):
    sent_messages: list[SentMessage] = Field(default_factory=list)


class BotInfo(ApiModel):
    user_id: str
    basic_id: str
    display_name: str
    picture_url: str | None = None
    premium_id: str | None = None
    chat_mode: str | None = None
    mark_as_read_mode: str | None = None


class Profile(ApiModel):
    user_id: str
    display_name: str
    picture_url: str | None = None
    status_message: str | None = None
    language: str | None = None
