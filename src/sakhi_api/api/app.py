"""
sakhi_api.api.app

FastAPI app factory for the Sakhi backend.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Build the token codec once from settings and share it read-only via app.state.
- Initialize and dispose shared infrastructure (DB engine/session factory).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sakhi_api import __version__
from sakhi_api.api.routers.auth import router as auth_router
from sakhi_api.api.routers.community import router as community_router
from sakhi_api.api.routers.health import router as health_router
from sakhi_api.api.routers.health_wellness import router as health_wellness_router
from sakhi_api.api.routers.period_tracking import router as period_tracking_router
from sakhi_api.api.routers.reminders import router as reminders_router
from sakhi_api.api.routers.users import router as users_router
from sakhi_api.auth.jwt import JwtConfig, TokenCodec
from sakhi_api.db.init_db import init_db
from sakhi_api.db.session import create_engine, create_sessionmaker
from sakhi_api.errors import register_error_handlers
from sakhi_api.observability.logging import configure_logging, get_logger
from sakhi_api.observability.middleware import RequestContextMiddleware
from sakhi_api.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Sakhi Health Tracking API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.token_codec = TokenCodec(JwtConfig.from_settings(settings))

    register_error_handlers(app)
    app.add_middleware(RequestContextMiddleware)
    # Added last so it wraps everything and answers preflight requests itself.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["x-request-id"],
    )
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(auth_router, prefix="/api/users", include_in_schema=False)
    app.include_router(users_router)
    app.include_router(period_tracking_router)
    app.include_router(reminders_router)
    app.include_router(health_wellness_router)
    app.include_router(community_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; authorization lives in `sakhi_api.auth`, data access in
# `sakhi_api.db.repositories`, and routers only glue the two together.
