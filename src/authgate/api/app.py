"""
authgate.api.app

FastAPI app factory for the authgate service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Wire the `Authenticator` to a user store: the one passed in, or a SQL store
  built from settings at startup.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from authgate import __version__
from authgate.api.deps import build_authenticator
from authgate.api.errors import register_error_handlers
from authgate.api.routers.health import router as health_router
from authgate.api.routers.users import router as users_router
from authgate.auth import UserStore
from authgate.db.init_db import init_db
from authgate.db.repositories.users import SqlUserStore
from authgate.db.session import create_engine, create_sessionmaker
from authgate.observability.logging import configure_logging, get_logger
from authgate.observability.middleware import RequestContextMiddleware
from authgate.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, store: UserStore | None = None) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = None
        if store is None:
            engine = create_engine(settings.database_url)
            if settings.env in ("dev", "test"):
                # Dev/test convenience: create tables automatically.
                await init_db(engine)
            app.state.authenticator = build_authenticator(
                settings, SqlUserStore(create_sessionmaker(engine))
            )
        try:
            yield
        finally:
            if engine is not None:
                await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="authgate",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if store is not None:
        # Caller-supplied store (tests, embedding apps): no startup work required.
        app.state.authenticator = build_authenticator(settings, store)

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(users_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Embedding applications can mount these routers next to their own and guard their
# routes with `Depends(authgate.api.deps.current_user)`.
