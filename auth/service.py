"""
Authentication core: registration, login and availability checks.

The services hold no mutable state of their own: the credential store handle,
token issuer and hashing cost are injected at construction by the application
bootstrap.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from auth.errors import AuthenticationError, ValidationError
from auth.jwt import TokenIssuer
from auth.models import Availability, LoginRequest, LoginResult, PublicUser, RegisterRequest
from auth.password import hash_password, verify_password
from database.store import UserStore

logger = logging.getLogger(__name__)

REGISTERED_MESSAGE = "User created successfully"

_LABELS = {
    "username": "Username",
    "email": "Email",
    "password": "Password",
    "handle": "Handle",
    "identifier": "Identifier",
}


def require_text(field: str, value: Any) -> str:
    """Return ``value`` unchanged if it is a string with visible content."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{_LABELS[field]} is required and must be a non-empty string"
        )
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates survive JSON decoding but cannot be hashed or stored.
        raise ValidationError(f"{_LABELS[field]} must be valid UTF-8 text") from None
    return value


class AuthService:
    def __init__(self, store: UserStore, tokens: TokenIssuer, bcrypt_rounds: int = 10):
        self.store = store
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    async def register(self, req: RegisterRequest) -> str:
        """
        Validate, hash and insert a new user.

        Values are stored exactly as received (no trimming or case folding).
        Unique-constraint violations surface from the store as ``StoreError``
        like any other store failure.
        """
        username = require_text("username", req.username)
        email = require_text("email", req.email)
        password = require_text("password", req.password)
        handle = require_text("handle", req.handle)

        password_hash = await asyncio.to_thread(hash_password, password, self.bcrypt_rounds)
        await self.store.insert_user(
            username=username,
            email=email,
            password_hash=password_hash,
            handle=handle,
        )
        logger.info("Registered user %s", username)
        return REGISTERED_MESSAGE

    async def login(self, req: LoginRequest) -> LoginResult:
        """Login with username or email + password."""
        identifier = require_text("identifier", req.identifier)
        password = require_text("password", req.password)

        user = await self.store.find_by_identifier(identifier)
        if user is None or not await asyncio.to_thread(
            verify_password, password, user.password_hash
        ):
            logger.info("Rejected login attempt")
            raise AuthenticationError()

        token = self.tokens.create_token(
            {"id": user.id, "username": user.username, "email": user.email}
        )
        logger.info("Login: %s (%s)", user.username, user.id)
        return LoginResult(token=token, user=PublicUser.model_validate(user))


class AvailabilityChecker:
    """Answers whether a username, email or handle is still free."""

    KINDS = ("username", "email", "handle")

    def __init__(self, store: UserStore):
        self.store = store

    async def check(self, kind: str, value: Any) -> Availability:
        if kind not in self.KINDS:
            raise ValueError(f"Unknown availability kind: {kind!r}")
        require_text(kind, value)
        exists = await self.store.exists(kind, value)
        logger.debug("%s availability check => exists=%s", kind, exists)
        return Availability(kind=kind, value=value, exists=exists)
