"""Errors raised while verifying and parsing an inbound webhook request.

All of them are client/protocol errors: the endpoint answers 400 with
``{"message": error.message}`` and never retries.
"""

from __future__ import annotations


class WebhookRequestError(Exception):
    """Base class for rejected webhook requests."""

    message = "Invalid webhook request"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)


class MissingSignatureError(WebhookRequestError):
    """Raised when the request carries no signature header."""

    message = "Request does not contain signature"


class InvalidSignatureError(WebhookRequestError):
    """Raised when the signature header does not match the request body."""

    message = "Invalid signature has given"


class InvalidEventRequestError(WebhookRequestError):
    """Raised when a verified body is not a well-formed event list."""

    message = "Invalid event request"
