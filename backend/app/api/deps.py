"""Request-scoped dependencies resolved from application state."""

from fastapi import Request

from backend.app.db.repositories import EntityStore
from backend.app.docs.service import DocumentService
from backend.app.highlights.service import HighlightService
from backend.app.llm.client import AIClient


def get_store(request: Request) -> EntityStore:
    """Entity store owned by the application."""
    return request.app.state.store


def get_document_service(request: Request) -> DocumentService:
    """Document service bound to the application's store and extractor."""
    return request.app.state.document_service


def get_highlight_service(request: Request) -> HighlightService:
    """Highlight service bound to the application's store."""
    return request.app.state.highlight_service


def get_ai(request: Request) -> AIClient:
    """AI client configured for the application."""
    return request.app.state.ai_client
