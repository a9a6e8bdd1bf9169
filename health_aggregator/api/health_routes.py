"""API routes for a Health aggregator.

Endpoints (mounted under ``settings.health_path``, ``/health`` by default):
  GET  {path}          — full status (status, details, timestamp)
  GET  {path}/simple   — status only
  POST {path}/refresh  — re-evaluate every check now, then full status

UP answers 200, DOWN answers 503.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..health import Health, State, Status

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["health"])

STATUS_CODES = {State.UP: 200, State.DOWN: 503}


def _health(request: Request) -> Health:
    return request.app.state.health


def _respond(status: Status, body: dict[str, Any]) -> JSONResponse:
    return JSONResponse(content=body, status_code=STATUS_CODES[status.state])


@health_router.get("")
def get_status(request: Request) -> JSONResponse:
    """Full status; may trigger a recompute if the cache is stale."""
    status = _health(request).status
    return _respond(status, status.to_dict())


@health_router.get("/simple")
def get_simple_status(request: Request) -> JSONResponse:
    status = _health(request).status
    return _respond(status, status.to_simple_dict())


@health_router.post("/refresh")
def refresh_status(request: Request) -> JSONResponse:
    """Force a full evaluation pass regardless of the cache window."""
    status = _health(request).force_update_status()
    logger.info("Health status refreshed on request: %s", status.state.value)
    return _respond(status, status.to_dict())
