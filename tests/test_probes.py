from __future__ import annotations

import os
import socket
import subprocess
import sys
import time
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from probe_demo.config import Settings
from probe_demo.main import create_app

ROOT = Path(__file__).resolve().parents[1]


def make_client(**overrides) -> TestClient:
    overrides.setdefault("startup_delay", 60.0)
    return TestClient(create_app(Settings(**overrides)))


def test_defaults_are_healthy_and_ready():
    client = make_client()

    health = client.get("/healthz")
    assert health.status_code == 200
    assert health.text == "OK"
    assert health.headers["cache-control"] == "no-store"

    ready = client.get("/readyz")
    assert ready.status_code == 200
    assert ready.text == "READY"


def test_mark_unhealthy_fails_liveness():
    client = make_client()

    response = client.get("/unhealthy")
    assert response.status_code == 200
    assert response.text == "Marked unhealthy"

    health = client.get("/healthz")
    assert health.status_code == 500
    assert health.text == "NOT OK"
    assert health.headers["cache-control"] == "no-store"


def test_unhealthy_does_not_touch_readiness():
    client = make_client()
    client.get("/unhealthy")

    assert client.get("/readyz").status_code == 200
    assert client.get("/").status_code == 200


def test_not_ready_then_ready_round_trip():
    client = make_client()

    response = client.get("/notready")
    assert response.status_code == 200
    assert response.text == "Marked not ready"

    ready = client.get("/readyz")
    assert ready.status_code == 503
    assert ready.text == "NOT READY"
    # liveness is independent of readiness
    assert client.get("/healthz").status_code == 200

    response = client.get("/ready")
    assert response.text == "Marked ready"
    assert client.get("/readyz").status_code == 200


def test_index_follows_readiness():
    client = make_client()

    page = client.get("/")
    assert page.status_code == 200
    assert page.headers["content-type"].startswith("text/html")
    assert "K8s Self-Heal Testing" in page.text
    for endpoint in ("/healthz", "/unhealthy", "/ready", "/notready"):
        assert f"callEndpoint('{endpoint}')" in page.text

    client.get("/notready")
    page = client.get("/")
    assert page.status_code == 503
    assert page.text == "<h1>Not Ready</h1>"

    client.get("/ready")
    assert client.get("/").status_code == 200


def test_index_renders_configured_labels():
    client = make_client(page_title="Notes - Stable", page_footer="Stable Notes v2.0")

    page = client.get("/")
    assert "<title>Notes - Stable</title>" in page.text
    assert "Stable Notes v2.0" in page.text
    assert "Canary" not in page.text


def test_readyz_can_be_disabled():
    client = make_client(expose_readyz=False)

    assert client.get("/readyz").status_code == 404
    client.get("/notready")
    assert client.get("/").status_code == 503


def test_unknown_route_is_not_found():
    client = make_client()
    assert client.get("/does-not-exist").status_code == 404


def test_apps_do_not_share_state():
    first = make_client()
    second = make_client()

    first.get("/unhealthy")
    assert first.get("/healthz").status_code == 500
    assert second.get("/healthz").status_code == 200


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def server():
    port = _free_port()
    env = dict(
        os.environ,
        PROBE_DEMO_HOST="127.0.0.1",
        PROBE_DEMO_PORT=str(port),
        PYTHONPATH=os.pathsep.join(filter(None, [str(ROOT), os.environ.get("PYTHONPATH")])),
    )
    proc = subprocess.Popen(
        [sys.executable, "-m", "probe_demo.main"],
        cwd=ROOT,
        env=env,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    base_url = f"http://127.0.0.1:{port}"
    deadline = time.monotonic() + 15
    while True:
        try:
            if httpx.get(f"{base_url}/healthz", timeout=1, trust_env=False).status_code == 200:
                break
        except httpx.TransportError:
            pass
        if proc.poll() is not None or time.monotonic() > deadline:
            proc.kill()
            pytest.fail("server did not start")
        time.sleep(0.1)

    yield proc, base_url

    if proc.poll() is None:
        proc.kill()
        proc.wait(timeout=5)


def test_crash_exits_with_non_zero_status(server):
    proc, base_url = server

    with pytest.raises(httpx.TransportError):
        httpx.get(f"{base_url}/crash", timeout=5, trust_env=False)

    assert proc.wait(timeout=5) == 1
    with pytest.raises(httpx.ConnectError):
        httpx.get(f"{base_url}/healthz", timeout=1, trust_env=False)


def test_startup_timer_restores_flags():
    app = create_app(Settings(startup_delay=0.2))

    with TestClient(app) as client:
        client.get("/unhealthy")
        client.get("/notready")
        assert client.get("/healthz").status_code == 500

        deadline = time.monotonic() + 5
        while client.get("/healthz").status_code != 200 and time.monotonic() < deadline:
            time.sleep(0.05)

        assert client.get("/healthz").text == "OK"
        assert client.get("/readyz").text == "READY"
        assert app.state.startup_timer.fired


def test_startup_timer_is_cancelled_on_shutdown():
    app = create_app(Settings(startup_delay=60.0))

    with TestClient(app) as client:
        client.get("/unhealthy")

    assert not app.state.startup_timer.fired
    assert app.state.probe_state.healthy is False
