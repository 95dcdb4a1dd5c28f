"""
JWT token creation and verification.

Tokens use the compact JWT layout (``header.payload.signature``, base64url)
signed with HMAC-SHA256. The secret is injected by the caller, normally from
``config.jwt_secret`` (env var: ``JWT_SECRET``). An ``exp`` claim is only added
when an expiry is configured.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Dict, Optional

from auth.errors import AuthenticationError

_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def _unb64url(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _encode_segment(obj: Dict[str, Any]) -> str:
    return _b64url(json.dumps(obj, separators=(",", ":")).encode())


class TokenIssuer:
    """Signs and verifies HS256 tokens with a shared secret."""

    def __init__(self, secret: str, expiry_seconds: Optional[int] = None):
        if not secret:
            raise ValueError("TokenIssuer requires a non-empty secret")
        self._secret = secret.encode()
        self._expiry_seconds = expiry_seconds

    def _sign(self, signing_input: bytes) -> bytes:
        return hmac.new(self._secret, signing_input, hashlib.sha256).digest()

    def create_token(self, claims: Dict[str, Any]) -> str:
        """Create a signed token carrying ``claims`` (plus ``iat``/``exp`` when expiring)."""
        payload = dict(claims)
        if self._expiry_seconds is not None:
            now = int(time.time())
            payload["iat"] = now
            payload["exp"] = now + self._expiry_seconds
        signing_input = f"{_encode_segment(_HEADER)}.{_encode_segment(payload)}"
        signature = self._sign(signing_input.encode())
        return f"{signing_input}.{_b64url(signature)}"

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify token and return its claims.

        Raises ``AuthenticationError`` on malformed, forged or expired tokens.
        """
        try:
            header_b64, payload_b64, sig_b64 = token.split(".")
            expected_sig = self._sign(f"{header_b64}.{payload_b64}".encode())
            if not hmac.compare_digest(expected_sig, _unb64url(sig_b64)):
                raise ValueError("bad signature")
            header = json.loads(_unb64url(header_b64))
            if header.get("alg") != "HS256":
                raise ValueError("unsupported algorithm")
            payload = json.loads(_unb64url(payload_b64))
            if "exp" in payload and int(payload["exp"]) <= time.time():
                raise ValueError("token expired")
        except Exception as exc:
            raise AuthenticationError(f"Invalid or expired token: {exc}") from exc
        return payload
