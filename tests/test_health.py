# tests/test_health.py
from typing import Any


def test_root_responds(client: Any) -> None:
    """The root endpoint describes the API."""
    r = client.get("/")
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Trip Nick API"
    assert body["docs"] == "/docs"


def test_health_endpoint(client: Any) -> None:
    """The health endpoint reports ok."""
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
