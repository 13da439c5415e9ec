"""
FastAPI application for exercising Kubernetes self-healing.

Features
--------
- Status page (`/`) with buttons that flip the probe flags. Returns 503 while
  the pod is marked not ready, so it doubles as a readiness check.
- Liveness probe (`/healthz`): 200 `OK` or 500 `NOT OK`.
- Readiness probe (`/readyz`): 200 `READY` or 503 `NOT READY` (optional).
- Failure injection (`/unhealthy`, `/ready`, `/notready`, `/crash`).
- Prometheus metrics at (`/metrics`) via `prometheus-fastapi-instrumentator`,
  with an optional `http_requests_total{method, route}` counter.

Intended Use
------------
Deploy behind a Service with liveness and readiness probes pointed at
`/healthz` and `/readyz` (or `/`), then use the buttons or plain `curl` to
watch the orchestrator restart the container or pull it from the endpoints.

Notes
-----
- State lives in memory only; a restart brings back `healthy=ready=True`.
- A startup timer forces both flags back to true `startup_delay` seconds
  after boot to mimic a slow start.
- Configuration comes from `PROBE_DEMO_*` environment variables, see
  `probe_demo.config.Settings`.

"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .config import Settings, get_settings
from .metrics import create_registry, setup_metrics
from .routes import readyz_router, router
from .state import ProbeState, StartupTimer

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    probe_state = ProbeState()
    startup_timer = StartupTimer(probe_state, settings.startup_delay)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        startup_timer.start()
        yield
        if not startup_timer.fired:
            logger.info("Shutting down before startup timer fired")
        await startup_timer.cancel()

    app = FastAPI(title=settings.page_title, lifespan=lifespan)
    app.state.settings = settings
    app.state.probe_state = probe_state
    app.state.startup_timer = startup_timer
    app.state.metrics_registry = create_registry()

    # /metrics and the request counter share the per-app registry
    setup_metrics(app, app.state.metrics_registry, count_requests=settings.count_requests)

    app.include_router(router)
    if settings.expose_readyz:
        app.include_router(readyz_router)

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server running on %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
