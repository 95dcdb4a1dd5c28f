"""
bcrypt hashing for stored credentials.

The cost factor is passed in by ``AuthService`` from ``config.bcrypt_rounds``
(10 unless overridden). Only the first 72 UTF-8 bytes of a password take part
in the hash; longer input is cut to that length before it reaches ``bcrypt``.
"""

from __future__ import annotations

import bcrypt

_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """True when ``password`` matches ``password_hash``; malformed hashes never match."""
    try:
        stored = password_hash.encode("ascii")
        return bcrypt.checkpw(_password_bytes(password), stored)
    except (ValueError, TypeError):
        return False
