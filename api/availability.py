"""
Username, email and handle availability routes.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from auth.dependencies import get_availability_checker, json_body
from auth.errors import AuthServiceError
from auth.routes import error_response
from auth.service import AvailabilityChecker

router = APIRouter(tags=["availability"])


async def _check(checker: AvailabilityChecker, kind: str, body: Dict[str, Any]):
    try:
        result = await checker.check(kind, body.get(kind))
    except AuthServiceError as exc:
        return error_response(exc)
    return result.to_response()


@router.post("/username-check")
async def username_check(
    body: Dict[str, Any] = Depends(json_body),
    checker: AvailabilityChecker = Depends(get_availability_checker),
):
    return await _check(checker, "username", body)


@router.post("/email-check")
async def email_check(
    body: Dict[str, Any] = Depends(json_body),
    checker: AvailabilityChecker = Depends(get_availability_checker),
):
    return await _check(checker, "email", body)


@router.post("/handle-check")
async def handle_check(
    body: Dict[str, Any] = Depends(json_body),
    checker: AvailabilityChecker = Depends(get_availability_checker),
):
    return await _check(checker, "handle", body)
