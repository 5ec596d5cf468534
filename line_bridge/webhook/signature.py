"""Webhook signature verification.

The platform signs every delivery with HMAC-SHA256 over the raw request
body, keyed by the channel secret, and sends the base64-encoded digest in
the ``x-line-signature`` header.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac

from line_bridge.webhook.errors import InvalidSignatureError, MissingSignatureError

SIGNATURE_HEADER = "x-line-signature"


def _as_bytes(secret: str | bytes) -> bytes:
    return secret.encode() if isinstance(secret, str) else secret


def sign(raw_body: bytes, secret: str | bytes) -> str:
    """Return the base64 signature the platform would send for ``raw_body``."""
    digest = hmac.new(_as_bytes(secret), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def verify(raw_body: bytes, signature_header: str | None, secret: str | bytes) -> None:
    """Verify ``signature_header`` against ``raw_body``.

    Raises:
        MissingSignatureError: header absent or empty.
        InvalidSignatureError: header is not base64, or the digest does not match.
    """
    if not signature_header:
        raise MissingSignatureError()

    try:
        provided = base64.b64decode(signature_header, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidSignatureError("signature is not valid base64") from exc

    expected = hmac.new(_as_bytes(secret), raw_body, hashlib.sha256).digest()
    # compare_digest also rejects a length mismatch in constant time
    if not hmac.compare_digest(provided, expected):
        raise InvalidSignatureError()


class SignatureVerifier:
    """Binds the channel secret so the verifier can be injected."""

    def __init__(self, channel_secret: str | bytes) -> None:
        self._secret = _as_bytes(channel_secret)

    def verify(self, raw_body: bytes, signature_header: str | None) -> None:
        verify(raw_body, signature_header, self._secret)
