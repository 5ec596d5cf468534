"""Typed webhook events.

Events arrive as a tagged union keyed by ``type``. The wire format is
camelCase; attributes here are snake_case. Every model is frozen: events
are produced by the parser and never modified afterwards.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class EventMode(str, Enum):
    ACTIVE = "active"
    STANDBY = "standby"


# --- Sources ---


class UserSource(BaseModel):
    model_config = _WIRE_CONFIG

    type: Literal["user"] = "user"
    user_id: str | None = None

    @property
    def id(self) -> str | None:
        return self.user_id


class GroupSource(BaseModel):
    model_config = _WIRE_CONFIG

    type: Literal["group"] = "group"
    group_id: str
    user_id: str | None = None

    @property
    def id(self) -> str | None:
        return self.group_id


class RoomSource(BaseModel):
    model_config = _WIRE_CONFIG

    type: Literal["room"] = "room"
    room_id: str
    user_id: str | None = None

    @property
    def id(self) -> str | None:
        return self.room_id


Source = Annotated[UserSource | GroupSource | RoomSource, Field(discriminator="type")]


class DeliveryContext(BaseModel):
    model_config = _WIRE_CONFIG

    is_redelivery: bool = False


# --- Event contents ---


class MessageContent(BaseModel):
    """Message body; fields beyond id/type depend on the message type."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True, extra="allow",
    )

    id: str
    type: str
    text: str | None = None
    quote_token: str | None = None


class PostbackContent(BaseModel):
    model_config = _WIRE_CONFIG

    data: str
    params: dict[str, Any] | None = None


class Members(BaseModel):
    model_config = _WIRE_CONFIG

    members: list[UserSource] = Field(default_factory=list)


# --- Events ---


class Event(BaseModel):
    """Fields common to every webhook event."""

    model_config = _WIRE_CONFIG

    kind: ClassVar[str] = ""

    type: str
    timestamp: int
    mode: EventMode = EventMode.ACTIVE
    source: Source | None = None
    webhook_event_id: str | None = None
    delivery_context: DeliveryContext | None = None


class ReplyableEvent(Event):
    reply_token: str | None = None


class MessageEvent(ReplyableEvent):
    kind: ClassVar[str] = "message"
    message: MessageContent


class FollowEvent(ReplyableEvent):
    kind: ClassVar[str] = "follow"


class UnfollowEvent(Event):
    kind: ClassVar[str] = "unfollow"


class JoinEvent(ReplyableEvent):
    kind: ClassVar[str] = "join"


class LeaveEvent(Event):
    kind: ClassVar[str] = "leave"


class MemberJoinedEvent(ReplyableEvent):
    kind: ClassVar[str] = "memberJoined"
    joined: Members


class MemberLeftEvent(Event):
    kind: ClassVar[str] = "memberLeft"
    left: Members


class PostbackEvent(ReplyableEvent):
    kind: ClassVar[str] = "postback"
    postback: PostbackContent


class VideoPlayCompleteEvent(ReplyableEvent):
    kind: ClassVar[str] = "videoPlayComplete"
    video_play_complete: dict[str, Any]


class BeaconEvent(ReplyableEvent):
    kind: ClassVar[str] = "beacon"
    beacon: dict[str, Any]


class AccountLinkEvent(ReplyableEvent):
    kind: ClassVar[str] = "accountLink"
    link: dict[str, Any]


class ThingsEvent(ReplyableEvent):
    kind: ClassVar[str] = "things"
    things: dict[str, Any]


class UnsendEvent(Event):
    kind: ClassVar[str] = "unsend"
    unsend: dict[str, Any]


class ActivatedEvent(Event):
    kind: ClassVar[str] = "activated"


class DeactivatedEvent(Event):
    kind: ClassVar[str] = "deactivated"


class BotSuspendedEvent(Event):
    kind: ClassVar[str] = "botSuspended"


class BotResumedEvent(Event):
    kind: ClassVar[str] = "botResumed"


class UnknownEvent(Event):
    """Event of a type this package does not model; keeps the raw payload.

    Source and mode are left unvalidated so a new kind never fails the batch.
    """

    mode: str = EventMode.ACTIVE.value
    source: dict[str, Any] | None = None  # type: ignore[assignment]
    raw: dict[str, Any] = Field(default_factory=dict)


EVENT_TYPES: dict[str, type[Event]] = {
    cls.kind: cls
    for cls in (
        MessageEvent,
        FollowEvent,
        UnfollowEvent,
        JoinEvent,
        LeaveEvent,
        MemberJoinedEvent,
        MemberLeftEvent,
        PostbackEvent,
        VideoPlayCompleteEvent,
        BeaconEvent,
        AccountLinkEvent,
        ThingsEvent,
        UnsendEvent,
        ActivatedEvent,
        DeactivatedEvent,
        BotSuspendedEvent,
        BotResumedEvent,
    )
}


def event_from_dict(data: dict[str, Any]) -> Event:
    """Validate one wire event into its concrete model."""
    cls = EVENT_TYPES.get(data.get("type", ""))
    if cls is None:
        return UnknownEvent.model_validate({**data, "raw": data})
    return cls.model_validate(data)


class CallbackRequest(BaseModel):
    """The webhook envelope: bot user id plus the event batch."""

    model_config = ConfigDict(frozen=True)

    destination: str | None = None
    events: list[Event]
