"""
Error taxonomy for the authentication core.

Every error carries the HTTP status it maps to; routes translate them into a
flat JSON body at the request boundary.
"""

from __future__ import annotations


class AuthServiceError(Exception):
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AuthServiceError):
    """Missing or malformed request input."""

    status_code = 400
    message = "Validation error"


class AuthenticationError(AuthServiceError):
    """Credential mismatch; the message never says which part was wrong."""

    status_code = 401
    message = "Invalid credentials"


class StoreError(AuthServiceError):
    """Any failure reported by the credential store."""

    status_code = 500

    def __init__(self, detail: object):
        super().__init__(f"Server Error: {detail}")
        self.detail = str(detail)
