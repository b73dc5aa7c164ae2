"""Application factory for the Sweet Shop API.

``create_app`` builds a FastAPI application from an explicit ``Settings``
object. The database engine, session factory and credential service are
created here once and stored on ``app.state``; request dependencies read
them from there instead of from module globals.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.auth import CredentialService
from core.config import Settings
from core.database import build_engine, build_session_factory
from core.exceptions import register_exception_handlers
from modules.auth.routes.auth_routes import router as auth_router
from modules.health.routes.health_routes import router as health_router
from modules.sweets.routes.sweet_routes import router as sweet_router
from app.startup import run_startup_checks

LOGGER = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Any startup failure propagates and the server refuses to start
    run_startup_checks(app.state.engine, app.state.settings)
    yield
    app.state.engine.dispose()
    LOGGER.info("Database engine disposed")


def create_app(settings: Settings) -> FastAPI:
    """Create the FastAPI application for ``settings``."""

    app = FastAPI(
        title="Sweet Shop Management API",
        description="""
    Inventory management for a sweet shop.

    ## Authentication

    Register or log in via `/api/auth/*` to obtain a bearer token and send it
    as `Authorization: Bearer <token>`. Creating, editing, deleting and
    restocking sweets requires the `admin` role.
    """,
        version=API_VERSION,
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.credentials = CredentialService(settings)

    # Register exception handlers for consistent error responses
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(sweet_router)

    return app
