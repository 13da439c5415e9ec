from __future__ import annotations

import logging
import os

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from .page import NOT_READY_HTML, render_index
from .state import ProbeState

logger = logging.getLogger(__name__)

router = APIRouter(tags=["probes"])
readyz_router = APIRouter(tags=["probes"])


def _state(request: Request) -> ProbeState:
    return request.app.state.probe_state


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    if not _state(request).ready:
        return HTMLResponse(NOT_READY_HTML, status_code=503)
    settings = request.app.state.settings
    return HTMLResponse(render_index(settings.page_title, settings.page_footer))


@router.get("/healthz", response_class=PlainTextResponse)
def healthz(request: Request):
    """Liveness probe. A 500 tells the orchestrator to restart the container."""
    headers = {"Cache-Control": "no-store"}
    if _state(request).healthy:
        return PlainTextResponse("OK", headers=headers)
    return PlainTextResponse("NOT OK", status_code=500, headers=headers)


@readyz_router.get("/readyz", response_class=PlainTextResponse)
def readyz(request: Request):
    """Readiness probe. A 503 takes the pod out of the Service endpoints."""
    if _state(request).ready:
        return PlainTextResponse("READY")
    return PlainTextResponse("NOT READY", status_code=503)


@router.get("/unhealthy", response_class=PlainTextResponse)
def unhealthy(request: Request):
    _state(request).mark_unhealthy()
    return PlainTextResponse("Marked unhealthy")


@router.get("/ready", response_class=PlainTextResponse)
def ready(request: Request):
    _state(request).mark_ready()
    return PlainTextResponse("Marked ready")


@router.get("/notready", response_class=PlainTextResponse)
def notready(request: Request):
    _state(request).mark_not_ready()
    return PlainTextResponse("Marked not ready")


@router.get("/crash", include_in_schema=False)
def crash():
    """Failure injection: kill the process on the spot, no response is sent."""
    logger.warning("Simulating crash...")
    os._exit(1)
