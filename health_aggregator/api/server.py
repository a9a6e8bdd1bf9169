"""FastAPI app factory wrapping a Health aggregator."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from .. import __version__
from ..config import settings
from ..health import Health
from .health_routes import health_router

logger = logging.getLogger(__name__)


def create_app(health: Health | None = None, path: str | None = None) -> FastAPI:
    """Create the FastAPI application serving ``health`` under ``path``."""
    app = FastAPI(title="Health Aggregator", version=__version__)
    app.state.health = health if health is not None else Health()
    app.include_router(health_router, prefix=path or settings.health_path)
    logger.info(
        "Health endpoint mounted at %s (%d checks)",
        path or settings.health_path,
        app.state.health.check_count,
    )
    return app
