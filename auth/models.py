"""Request / response schemas for the auth and availability endpoints.

Request fields accept any JSON value; presence and type checks are done
by the service so that failures come back as the documented 400 bodies.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class RegisterRequest(BaseModel):
    username: Any = None
    email: Any = None
    password: Any = None
    handle: Any = None


class LoginRequest(BaseModel):
    identifier: Any = None
    password: Any = None


class PublicUser(BaseModel):
    """User as returned to callers; there is no ``password_hash`` field."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    handle: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginResult(BaseModel):
    token: str
    user: PublicUser


class Availability(BaseModel):
    kind: str
    value: Any
    exists: bool

    @property
    def available(self) -> bool:
        return not self.exists

    def to_response(self) -> dict:
        return {self.kind: self.value, "exists": self.exists, "available": self.available}
