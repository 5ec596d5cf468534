"""Messaging API client.

Thin async wrapper over the platform's REST endpoints. Non-2xx responses
raise ``httpx.HTTPStatusError``; nothing is retried here.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from line_bridge.config import DEFAULT_API_BASE_URL, LineSettings
from line_bridge.messaging.models import (
    BotInfo,
    BroadcastRequest,
    MulticastRequest,
    Profile,
    PushMessageRequest,
    ReplyMessageRequest,
    SendMessageResponse,
)

logger = logging.getLogger(__name__)

_TIMEOUT_SECONDS = 30.0


def create_http_client(
    channel_token: str,
    base_url: str = DEFAULT_API_BASE_URL,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Return an AsyncClient pointed at the API with the bot's bearer token."""
    return httpx.AsyncClient(
        base_url=base_url,
        headers={"Authorization": f"Bearer {channel_token}"},
        timeout=_TIMEOUT_SECONDS,
        transport=transport,
        verify=True,
    )


class MessagingApiClient:
    """Messaging API operations used by the bot client."""

    def __init__(
        self,
        channel_token: str,
        base_url: str = DEFAULT_API_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._channel_token = channel_token
        self._base_url = base_url
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: LineSettings) -> MessagingApiClient:
        return cls(settings.channel_token, base_url=settings.api_base_url)

    def http(self) -> httpx.AsyncClient:
        """Pre-configured client for endpoints not wrapped here."""
        return create_http_client(self._channel_token, self._base_url, self._transport)

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        async with self.http() as client:
            resp = await client.request(method, path, json=json, headers=headers)
        if resp.is_error:
            logger.warning(
                "Messaging API %s %s failed with %d", method, path, resp.status_code,
            )
        resp.raise_for_status()
        return resp.json() if resp.content else {}

    async def reply_message(self, request: ReplyMessageRequest) -> SendMessageResponse:
        data = await self._request("POST", "/v2/bot/message/reply", json=request.to_wire())
        return SendMessageResponse.model_validate(data)

    async def push_message(
        self, request: PushMessageRequest, retry_key: str | None = None,
    ) -> SendMessageResponse:
        headers = {"X-Line-Retry-Key": retry_key} if retry_key else None
        data = await self._request(
            "POST", "/v2/bot/message/push", json=request.to_wire(), headers=headers,
        )
        return SendMessageResponse.model_validate(data)

    async def multicast(self, request: MulticastRequest) -> None:
        await self._request("POST", "/v2/bot/message/multicast", json=request.to_wire())

    async def broadcast(self, request: BroadcastRequest) -> None:
        await self._request("POST", "/v2/bot/message/broadcast", json=request.to_wire())

    async def get_bot_info(self) -> BotInfo:
        return BotInfo.model_validate(await self._request("GET", "/v2/bot/info"))

    async def get_profile(self, user_id: str) -> Profile:
        return Profile.model_validate(await self._request("GET", f"/v2/bot/profile/{user_id}"))
