"""
Auth API routes — register, login.

Registration validation errors answer with ``{"message": ...}``; every other
failure answers with ``{"error": ...}``.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from auth.dependencies import get_auth_service, json_body
from auth.errors import AuthServiceError, ValidationError
from auth.models import LoginRequest, RegisterRequest
from auth.service import AuthService

router = APIRouter(tags=["auth"])


def error_response(exc: AuthServiceError, key: str = "error") -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={key: exc.message})


@router.post("/register", status_code=status.HTTP_201_CREATED)
@router.post("/signup", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def register(
    body: Dict[str, Any] = Depends(json_body),
    svc: AuthService = Depends(get_auth_service),
):
    """Register a new user."""
    try:
        message = await svc.register(RegisterRequest.model_validate(body))
    except ValidationError as exc:
        return error_response(exc, key="message")
    except AuthServiceError as exc:
        return error_response(exc)
    return {"message": message}


@router.post("/login")
async def login(
    body: Dict[str, Any] = Depends(json_body),
    svc: AuthService = Depends(get_auth_service),
):
    """Login with username or email + password."""
    try:
        result = await svc.login(LoginRequest.model_validate(body))
    except AuthServiceError as exc:
        return error_response(exc)
    return result.model_dump(mode="json")
