"""Tests for webhook signature verification."""

from __future__ import annotations

import base64
import hashlib
import hmac as hmac_mod
from unittest.mock import patch

import pytest

from line_bridge.webhook.errors import InvalidSignatureError, MissingSignatureError
from line_bridge.webhook.signature import SignatureVerifier, sign, verify

SECRET = "s3cr3t"
BODY = b'{"events":[]}'


def _expected_signature(secret: str, body: bytes) -> str:
    digest = hmac_mod.new(secret.encode(), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


class TestSign:
    def test_matches_hmac_sha256_base64(self) -> None:
        assert sign(BODY, SECRET) == _expected_signature(SECRET, BODY)

    def test_accepts_bytes_secret(self) -> None:
        assert sign(BODY, SECRET.encode()) == sign(BODY, SECRET)


class TestVerify:
    def test_valid_signature_accepted(self) -> None:
        assert verify(BODY, _expected_signature(SECRET, BODY), SECRET) is None

    def test_missing_header_raises_missing(self) -> None:
        with pytest.raises(MissingSignatureError) as exc_info:
            verify(BODY, None, SECRET)
        assert exc_info.value.message == "Request does not contain signature"

    def test_empty_header_raises_missing(self) -> None:
        with pytest.raises(MissingSignatureError):
            verify(BODY, "", SECRET)

    def test_wrong_digest_rejected(self) -> None:
        signature = base64.b64encode(b"not-a-valid-digest").decode()
        with pytest.raises(InvalidSignatureError) as exc_info:
            verify(BODY, signature, SECRET)
        assert exc_info.value.message == "Invalid signature has given"

    def test_non_base64_header_rejected(self) -> None:
        with pytest.raises(InvalidSignatureError):
            verify(BODY, "not base64!!", SECRET)

    def test_non_ascii_header_rejected(self) -> None:
        with pytest.raises(InvalidSignatureError):
            verify(BODY, "sïgnature", SECRET)

    def test_signature_for_other_body_rejected(self) -> None:
        signature = _expected_signature(SECRET, b'{"events":[{}]}')
        with pytest.raises(InvalidSignatureError):
            verify(BODY, signature, SECRET)

    def test_signature_with_other_secret_rejected(self) -> None:
        signature = _expected_signature("other", BODY)
        with pytest.raises(InvalidSignatureError):
            verify(BODY, signature, SECRET)

    def test_verification_is_repeatable(self) -> None:
        signature = _expected_signature(SECRET, BODY)
        verify(BODY, signature, SECRET)
        verify(BODY, signature, SECRET)
        bad = base64.b64encode(b"x").decode()
        for _ in range(2):
            with pytest.raises(InvalidSignatureError):
                verify(BODY, bad, SECRET)

    def test_constant_time_comparison(self) -> None:
        with patch(
            "line_bridge.webhook.signature.hmac.compare_digest", return_value=True,
        ) as mock_cmp:
            verify(BODY, _expected_signature(SECRET, BODY), SECRET)
            mock_cmp.assert_called_once()


class TestSignatureVerifier:
    def test_binds_secret(self) -> None:
        verifier = SignatureVerifier(SECRET)
        verifier.verify(BODY, sign(BODY, SECRET))
        with pytest.raises(InvalidSignatureError):
            verifier.verify(BODY, sign(BODY, "other"))
