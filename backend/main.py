"""
FastAPI application factory for the program conversion service.

``create_app`` wires Sentry, CORS and the health, programs and clients
routers. Tests build their own app with explicit settings and override the
repository providers from ``api.deps``:

    app = create_app(settings=Settings(environment="test", _env_file=None))
    app.dependency_overrides[get_routine_repo] = lambda: FakeRoutineRepository()

Run locally with ``uvicorn backend.main:app --reload`` or ``python -m backend``.
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the program conversion API.

    Args:
        settings: Settings to use; defaults to the cached ``get_settings()``

    Returns:
        The configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    _init_sentry(settings)

    app = FastAPI(
        title="CoachFlow Program API",
        description="Converts trainer-authored programs into client routines",
        version="1.0.0",
    )

    _configure_cors(app, settings)
    _include_routers(app)
    _log_feature_flags(settings)

    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
        )
        logger.info("Sentry initialized for program-api")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        clients_router,
        health_router,
        programs_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Domain routers (with prefixes defined in each router)
    app.include_router(programs_router)
    app.include_router(clients_router)


def _log_feature_flags(settings: Settings) -> None:
    """Log the status of feature flags at startup."""
    if settings.conversion_idempotency_enabled:
        logger.info("Conversion idempotency ledger is enabled")
    else:
        logger.warning("=== CONVERSION IDEMPOTENCY DISABLED: resends create duplicates ===")
    logger.info("Conversion worker threads: %d", settings.conversion_max_workers)


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
