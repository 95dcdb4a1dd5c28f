"""
Account authentication service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.availability import router as availability_router
from api.health import router as health_router
from api.middleware import register_middleware
from auth.errors import StoreError
from auth.jwt import TokenIssuer
from auth.routes import router as auth_router
from auth.service import AuthService, AvailabilityChecker
from config.settings import Settings, config
from database.session import build_engine
from database.store import UserStore

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncpg"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[UserStore] = None,
) -> FastAPI:
    settings = settings or config
    if store is None:
        store = UserStore(build_engine(settings), timeout=settings.store_timeout_seconds)

    app = FastAPI(
        title="Auth Service",
        version="1.0.0",
        description="Username/email/password registration and login.",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)

    tokens = TokenIssuer(settings.jwt_secret, expiry_seconds=settings.jwt_expiry_seconds)
    app.state.settings = settings
    app.state.user_store = store
    app.state.auth_service = AuthService(store, tokens, bcrypt_rounds=settings.bcrypt_rounds)
    app.state.availability_checker = AvailabilityChecker(store)

    # Routes
    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(availability_router, prefix=settings.api_prefix)
    app.include_router(health_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def on_startup():
        if settings.jwt_expiry_seconds is None:
            logger.warning("JWT_EXPIRY_SECONDS is unset: issued tokens never expire")
        if settings.create_tables:
            logger.info("Ensuring users table exists…")
            try:
                await store.create_tables()
            except StoreError as exc:
                logger.error("Could not create users table, continuing: %s", exc.detail)
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await store.dispose()
        logger.info("Credential store closed.")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
