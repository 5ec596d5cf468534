"""FastAPI application exposing the webhook endpoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from line_bridge.audit.logger import AuditLogger
from line_bridge.bus.event_bus import EventBus
from line_bridge.config import LineSettings
from line_bridge.webhook.endpoint import WebhookEndpoint
from line_bridge.webhook.handlers import WebhookHandler, create_handler
from line_bridge.webhook.models import WebhookRequest
from line_bridge.webhook.parser import EventParser, EventRequestParser
from line_bridge.webhook.signature import SignatureVerifier

logger = logging.getLogger(__name__)


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    settings = LineSettings.from_env()
    audit_logger = (
        AuditLogger.from_env(settings.audit_log_path) if settings.audit_log_path else None
    )
    return create_app(settings, audit_logger=audit_logger)


def create_app(
    settings: LineSettings,
    handler: WebhookHandler | None = None,
    parser: EventParser | None = None,
    bus: EventBus | None = None,
    audit_logger: AuditLogger | None = None,
) -> FastAPI:
    """Create the app; unset collaborators are built from ``settings``."""
    app = FastAPI(docs_url=None, redoc_url=None)

    if handler is None:
        handler = create_handler(settings.webhook_handler, bus)
    endpoint = WebhookEndpoint(
        verifier=SignatureVerifier(settings.channel_secret),
        parser=parser or EventRequestParser(),
        handler=handler,
        audit_logger=audit_logger,
    )
    app.state.settings = settings
    app.state.endpoint = endpoint

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(settings.route)
    async def webhook(request: Request) -> Response:
        result = await endpoint.handle(WebhookRequest(
            body=await request.body(),
            headers=dict(request.headers),
            path=request.url.path,
            source_ip=request.client.host if request.client else None,
        ))
        if result.is_error:
            return JSONResponse({"message": result.message}, status_code=result.status_code)
        return PlainTextResponse(result.text, status_code=result.status_code)

    logger.info("Webhook route %s using %s", settings.route, type(handler).__name__)
    return app
