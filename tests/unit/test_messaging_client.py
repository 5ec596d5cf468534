"""Tests for the Messaging API client."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from line_bridge.messaging.client import MessagingApiClient, create_http_client
from line_bridge.messaging.models import (
    BroadcastRequest,
    ImageMessage,
    LocationMessage,
    MulticastRequest,
    PushMessageRequest,
    ReplyMessageRequest,
    StickerMessage,
    TextMessage,
)

TOKEN = "test-channel-token"


class _Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, status_code: int = 200, payload: dict[str, Any] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._status_code = status_code
        self._payload = payload if payload is not None else {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self._status_code, json=self._payload)


def _make_client(recorder: _Recorder) -> MessagingApiClient:
    return MessagingApiClient(TOKEN, transport=httpx.MockTransport(recorder))


class TestHttpClient:
    def test_preconfigured_base_url_and_auth(self) -> None:
        client = create_http_client(TOKEN, base_url="https://api.example.test")
        assert client.base_url.host == "api.example.test"
        assert client.headers["authorization"] == f"Bearer {TOKEN}"


class TestReplyMessage:
    @pytest.mark.asyncio
    async def test_posts_reply_with_camel_case_body(self) -> None:
        recorder = _Recorder(payload={"sentMessages": [{"id": "461230966842064897"}]})
        client = _make_client(recorder)

        resp = await client.reply_message(ReplyMessageRequest(
            reply_token="token",
            messages=[TextMessage(text="hi"), StickerMessage(package_id="1", sticker_id="2")],
        ))

        (request,) = recorder.requests
        assert request.method == "POST"
        assert request.url == httpx.URL("https://api.line.me/v2/bot/message/reply")
        assert request.headers["authorization"] == f"Bearer {TOKEN}"
        assert json.loads(request.content) == {
            "replyToken": "token",
            "messages": [
                {"type": "text", "text": "hi"},
                {"type": "sticker", "packageId": "1", "stickerId": "2"},
            ],
            "notificationDisabled": False,
        }
        assert resp.sent_messages[0].id == "461230966842064897"

    @pytest.mark.asyncio
    async def test_error_status_propagates(self) -> None:
        client = _make_client(_Recorder(status_code=400, payload={"message": "Invalid reply token"}))

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await client.reply_message(ReplyMessageRequest(
                reply_token="expired", messages=[TextMessage(text="hi")],
            ))
        assert exc_info.value.response.status_code == 400


class TestOtherOperations:
    @pytest.mark.asyncio
    async def test_push_sends_retry_key(self) -> None:
        recorder = _Recorder(payload={"sentMessages": []})
        client = _make_client(recorder)

        await client.push_message(
            PushMessageRequest(to="U123", messages=[TextMessage(text="hello")]),
            retry_key="123e4567-e89b-12d3-a456-426614174000",
        )

        (request,) = recorder.requests
        assert request.url.path == "/v2/bot/message/push"
        assert request.headers["x-line-retry-key"] == "123e4567-e89b-12d3-a456-426614174000"
        assert json.loads(request.content)["to"] == "U123"

    @pytest.mark.asyncio
    async def test_broadcast_accepts_empty_response(self) -> None:
        recorder = _Recorder()
        client = _make_client(recorder)

        await client.broadcast(BroadcastRequest(messages=[TextMessage(text="news")]))

        assert recorder.requests[0].url.path == "/v2/bot/message/broadcast"

    @pytest.mark.asyncio
    async def test_get_bot_info(self) -> None:
        recorder = _Recorder(payload={
            "userId": "Ub9952f8",
            "basicId": "@216ru",
            "displayName": "Example bot",
            "chatMode": "bot",
            "markAsReadMode": "auto",
        })
        client = _make_client(recorder)

        info = await client.get_bot_info()

        assert recorder.requests[0].method == "GET"
        assert recorder.requests[0].url.path == "/v2/bot/info"
        assert info.display_name == "Example bot"
        assert info.picture_url is None

    @pytest.mark.asyncio
    async def test_get_profile(self) -> None:
        recorder = _Recorder(payload={"userId": "U4af4980629", "displayName": "LINE taro"})
        client = _make_client(recorder)

        profile = await client.get_profile("U4af4980629")

        assert recorder.requests[0].url.path == "/v2/bot/profile/U4af4980629"
        assert profile.display_name == "LINE taro"

    @pytest.mark.asyncio
    async def test_multicast_mixed_messages(self) -> None:
        recorder = _Recorder()
        client = _make_client(recorder)

        await client.multicast(MulticastRequest(
            to=["U1", "U2"],
            messages=[
                ImageMessage(
                    original_content_url="https://example.com/a.jpg",
                    preview_image_url="https://example.com/a_s.jpg",
                ),
                LocationMessage(
                    title="my location", address="Tokyo", latitude=35.65910807942215,
                    longitude=139.70372892916203,
                ),
            ],
        ))

        (request,) = recorder.requests
        assert request.url.path == "/v2/bot/message/multicast"
        body = json.loads(request.content)
        assert body["to"] == ["U1", "U2"]
        assert body["messages"][0] == {
            "type": "image",
            "originalContentUrl": "https://example.com/a.jpg",
            "previewImageUrl": "https://example.com/a_s.jpg",
        }
        assert body["messages"][1]["type"] == "location"
        assert body["messages"][1]["address"] == "Tokyo"
