"""
FastAPI dependencies for authentication.

Provides the JSON-body reader and the service getters used by the auth,
availability and health routes. Services live on ``app.state`` and are
installed by ``main.create_app``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from fastapi import Request

from auth.service import AuthService, AvailabilityChecker
from database.store import UserStore

logger = logging.getLogger(__name__)


async def json_body(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    Anything else (empty body, invalid JSON, arrays, scalars) yields ``{}`` so
    the route's own field validation produces the 400 response.
    """
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        logger.debug("Ignoring non-JSON body on %s", request.url.path)
        return {}
    return body if isinstance(body, dict) else {}


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_availability_checker(request: Request) -> AvailabilityChecker:
    return request.app.state.availability_checker


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store
