"""
Task Manager API — application entry point.

Run with ``python main.py`` or ``uvicorn main:create_app --factory``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from auth.jwt import TokenIssuer, TokenValidator
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from config.settings import Settings, get_settings
from database.session import Database
from tasks.routes import router as tasks_router

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Build the application from an explicit ``Settings`` value.

    Raises ``ConfigurationError`` when the signing key is missing, so a
    misconfigured process never starts serving.
    """
    settings = settings or get_settings()
    configure_logging(settings.debug)

    app = FastAPI(
        title="Task Manager API",
        version="1.0.0",
        description="Multi-tenant task management with JWT auth.",
    )

    app.state.settings = settings
    app.state.token_issuer = TokenIssuer(settings)
    app.state.token_validator = TokenValidator(settings)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.database = database or Database.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth")
    app.include_router(tasks_router, prefix=f"{settings.api_prefix}/tasks")

    @app.on_event("startup")
    async def on_startup():
        if settings.create_tables:
            await app.state.database.create_all()
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.database.dispose()

    return app


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(
        create_app(_settings),
        host=_settings.host,
        port=_settings.port,
        log_level="debug" if _settings.debug else "info",
    )
