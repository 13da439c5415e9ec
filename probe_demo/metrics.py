"""
Prometheus wiring: a per-app registry, the request counter and `/metrics`.

The `route` label is the matched route template. Every path without a route
is folded into `route="none"`, so scanning random URLs cannot grow the
registry.
"""
from __future__ import annotations

from typing import Callable

from fastapi import FastAPI
from prometheus_client import (
    CollectorRegistry,
    Counter,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
)
from prometheus_fastapi_instrumentator import Instrumentator
from prometheus_fastapi_instrumentator.metrics import Info


def create_registry() -> CollectorRegistry:
    """Fresh registry carrying the default process, platform and GC metrics."""
    registry = CollectorRegistry()
    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    GCCollector(registry=registry)
    return registry


def requests_total(registry: CollectorRegistry) -> Callable[[Info], None]:
    counter = Counter(
        "http_requests_total",
        "Total number of HTTP requests",
        labelnames=("method", "route"),
        registry=registry,
    )

    def instrumentation(info: Info) -> None:
        counter.labels(method=info.method, route=info.modified_handler).inc()

    return instrumentation


def setup_metrics(app: FastAPI, registry: CollectorRegistry, count_requests: bool = True) -> Instrumentator:
    instrumentator = Instrumentator(should_group_untemplated=True, registry=registry)
    if count_requests:
        instrumentator.add(requests_total(registry)).instrument(app)
    # expose /metrics on the same registry
    instrumentator.expose(app, endpoint="/metrics", include_in_schema=False)
    return instrumentator
