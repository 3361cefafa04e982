"""Integration tests for /health, /metrics and error handling."""

from collections.abc import Callable

from fastapi import FastAPI
from fastapi.testclient import TestClient

from tests.fakes import FakeAIClient


class ExplodingAIClient(FakeAIClient):
    """AI client failing with an unexpected exception."""

    async def summarize(self, text: str) -> str:
        raise RuntimeError("unexpected")


def test_health(client: TestClient) -> None:
    """Test /health returns ok."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root(client: TestClient) -> None:
    """Test the root endpoint reports the API name."""
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Reading Assistant API"


def test_metrics_exposes_document_counter(client: TestClient) -> None:
    """Test /metrics returns Prometheus text including document counts."""
    client.post("/api/documents/url", json={"url": "https://example.com/a"})

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
    assert "documents_created_total" in response.text
    assert "remote_call_latency_ms" in response.text


def test_unexpected_error_returns_generic_500(app_factory: Callable[..., FastAPI]) -> None:
    """Test that unanticipated exceptions become a generic 500."""
    client = TestClient(app_factory(ai_client=ExplodingAIClient()), raise_server_exceptions=False)

    response = client.post("/api/ai/summarize", json={"text": "hello"})

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
