"""
Health check: server liveness plus a database round trip.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from auth.dependencies import get_user_store
from auth.errors import StoreError
from database.store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(store: UserStore = Depends(get_user_store)):
    try:
        await store.ping()
    except StoreError as exc:
        logger.warning("Health check: database unreachable (%s)", exc.detail)
        return JSONResponse(
            status_code=500,
            content={"server": "ok", "database": "error", "details": exc.detail},
        )
    return {"server": "ok", "database": "ok"}
