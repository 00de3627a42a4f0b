"""
FastAPI application factory for the hierarchy cascade API.

`create_app` wires settings, logging, Sentry, CORS and the routers. Tests
build their own instance with explicit settings:

    test_app = create_app(settings=Settings(environment="test", _env_file=None))

Run locally with `uvicorn backend.main:app --reload` or `python -m backend`.
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build a configured application.

    Args:
        settings: Settings to use; defaults to the cached environment settings.

    Returns:
        FastAPI instance with the health and hierarchy routers mounted.
    """
    settings = settings or get_settings()

    _configure_logging(settings)
    _init_sentry(settings)

    app = FastAPI(
        title="Hierarchy Cascade API",
        description="Delete previews, cascade deletes and week duplication for training programs",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _include_routers(app)

    logger.info(
        f"Hierarchy cascade API ready ({settings.environment}, "
        f"batch budget {settings.cascade_batch_budget})"
    )
    return app


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(settings.log_level)


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if a DSN is configured."""
    if not settings.sentry_dsn:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1,
    )
    logger.info("Sentry initialized for hierarchy-cascade-api")


def _include_routers(app: FastAPI) -> None:
    from api.routers import health_router, hierarchy_router

    app.include_router(health_router)
    app.include_router(hierarchy_router)


app = create_app()
