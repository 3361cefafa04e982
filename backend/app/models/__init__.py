"""Models package - re-exports for convenience."""

from backend.app.models.ai import AdditionalResource, Explanation, Source, SourceList, Summary
from backend.app.models.common import CamelModel, DocumentType, EntityKind
from backend.app.models.docs import Document, ExtractedArticle, NewDocument
from backend.app.models.highlights import Highlight, NewHighlight
from backend.app.models.users import NewUser, User

__all__ = [
    # Common
    "CamelModel",
    "DocumentType",
    "EntityKind",
    # Users
    "NewUser",
    "User",
    # Documents
    "NewDocument",
    "Document",
    "ExtractedArticle",
    # Highlights
    "NewHighlight",
    "Highlight",
    # AI
    "AdditionalResource",
    "Explanation",
    "Source",
    "SourceList",
    "Summary",
]
