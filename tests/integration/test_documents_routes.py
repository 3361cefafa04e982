"""Integration tests for document API routes."""

import base64
from collections.abc import Callable

import httpx
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.app.errors import ExtractionError
from tests.fakes import FakeExtractor

PDF_BYTES = b"%PDF-1.4\n%test\n"
MAX_PDF_BYTES = 10 * 1024 * 1024


def upload_pdf(
    client: TestClient,
    content: bytes = PDF_BYTES,
    title: str | None = "Paper",
    media_type: str = "application/pdf",
) -> httpx.Response:
    data = {"title": title} if title is not None else {}
    return client.post(
        "/api/documents/pdf",
        files={"file": ("paper.pdf", content, media_type)},
        data=data,
    )


class TestCreateUrlDocument:
    """Test POST /api/documents/url."""

    def test_creates_document_from_extraction(self, client: TestClient) -> None:
        """Test the canonical URL scenario."""
        response = client.post("/api/documents/url", json={"url": "https://example.com/a"})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 1
        assert data["type"] == "url"
        assert data["content"] == "<p>hi</p>"
        assert data["title"] == "A"
        assert data["readingTime"] == 1
        assert data["pdfData"] is None
        assert data["url"] == "https://example.com/a"
        assert data["userId"] == 1
        assert "addedAt" in data

    def test_title_override(self, client: TestClient) -> None:
        """Test that a provided title replaces the extracted one."""
        response = client.post(
            "/api/documents/url", json={"url": "https://example.com/a", "title": "Mine"}
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Mine"

    def test_long_title_override_is_accepted(self, client: TestClient) -> None:
        """Test that the title override has no length cap."""
        title = "t" * 600

        response = client.post(
            "/api/documents/url", json={"url": "https://example.com/a", "title": title}
        )

        assert response.status_code == 200
        assert response.json()["title"] == title

    def test_invalid_url_returns_400(self, client: TestClient, extractor: FakeExtractor) -> None:
        """Test that malformed URLs are validation errors and never fetched."""
        response = client.post("/api/documents/url", json={"url": "not a url"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation error"
        assert body["details"][0]["field"] == "url"
        assert extractor.calls == []

    def test_missing_url_returns_400(self, client: TestClient) -> None:
        """Test that a missing url is a validation error."""
        response = client.post("/api/documents/url", json={"title": "x"})

        assert response.status_code == 400

    def test_extraction_failure_returns_500(self, app_factory: Callable[..., FastAPI]) -> None:
        """Test that extraction failures map to 500 naming the URL."""
        failing = FakeExtractor(error=ExtractionError("https://bad.example/", "HTTP 502"))
        client = TestClient(app_factory(extractor=failing))

        response = client.post("/api/documents/url", json={"url": "https://bad.example/"})

        assert response.status_code == 500
        assert response.json() == {
            "message": "Failed to extract content from URL: https://bad.example/"
        }
        assert client.get("/api/documents").json() == []


class TestCreatePdfDocument:
    """Test POST /api/documents/pdf."""

    def test_upload_pdf(self, client: TestClient) -> None:
        """Test that a PDF upload is stored base64-encoded."""
        response = upload_pdf(client)

        assert response.status_code == 200
        data = response.json()
        assert data["type"] == "pdf"
        assert data["title"] == "Paper"
        assert data["content"] is None
        assert data["url"] is None
        assert data["readingTime"] is None
        assert base64.b64decode(data["pdfData"]) == PDF_BYTES

    def test_wrong_media_type_returns_400(self, client: TestClient) -> None:
        """Test that non-PDF uploads are rejected."""
        response = upload_pdf(client, content=b"hello", media_type="text/plain")

        assert response.status_code == 400
        assert response.json()["details"][0]["message"] == "Uploaded file is not a PDF"

    def test_missing_file_returns_400(self, client: TestClient) -> None:
        """Test that a request without a file is rejected."""
        response = client.post("/api/documents/pdf", data={"title": "Paper"})

        assert response.status_code == 400

    def test_missing_title_returns_400(self, client: TestClient) -> None:
        """Test that a request without a title is rejected."""
        response = upload_pdf(client, title=None)

        assert response.status_code == 400
        fields = [d["field"] for d in response.json()["details"]]
        assert "title" in fields

    def test_exactly_10_mib_is_accepted(self, client: TestClient) -> None:
        """Test the inclusive upper bound."""
        response = upload_pdf(client, content=b"x" * MAX_PDF_BYTES)

        assert response.status_code == 200

    def test_10_mib_plus_one_byte_returns_400(self, client: TestClient) -> None:
        """Test that one byte past the limit is rejected without storing anything."""
        response = upload_pdf(client, content=b"x" * (MAX_PDF_BYTES + 1))

        assert response.status_code == 400
        assert "too large" in response.json()["details"][0]["message"]
        assert client.get("/api/documents").json() == []


class TestReadDocuments:
    """Test GET /api/documents and GET /api/documents/{id}."""

    def test_list_newest_first(self, client: TestClient) -> None:
        """Test that documents are listed newest first."""
        first = client.post("/api/documents/url", json={"url": "https://example.com/a"}).json()
        second = upload_pdf(client).json()

        response = client.get("/api/documents")

        assert response.status_code == 200
        assert [d["id"] for d in response.json()] == [second["id"], first["id"]]

    def test_get_document(self, client: TestClient) -> None:
        """Test fetching a document by id."""
        created = upload_pdf(client).json()

        response = client.get(f"/api/documents/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_unknown_document_returns_404(self, client: TestClient) -> None:
        """Test that unknown ids return 404."""
        response = client.get("/api/documents/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Document not found"}

    def test_non_integer_id_returns_400(self, client: TestClient) -> None:
        """Test that a non-numeric id is a validation error."""
        response = client.get("/api/documents/abc")

        assert response.status_code == 400

    def test_document_highlights_newest_first(self, client: TestClient) -> None:
        """Test GET /api/documents/{id}/highlights ordering and filtering."""
        doc = upload_pdf(client).json()
        first = client.post("/api/highlights", json={"documentId": doc["id"], "text": "one"}).json()
        client.post("/api/highlights", json={"documentId": 99, "text": "other"})
        second = client.post(
            "/api/highlights", json={"documentId": doc["id"], "text": "two"}
        ).json()

        response = client.get(f"/api/documents/{doc['id']}/highlights")

        assert response.status_code == 200
        assert [h["id"] for h in response.json()] == [second["id"], first["id"]]

    def test_highlights_for_document_without_any(self, client: TestClient) -> None:
        """Test that a document with no highlights returns an empty list."""
        response = client.get("/api/documents/5/highlights")

        assert response.status_code == 200
        assert response.json() == []
