"""Highlight domain models."""

from datetime import datetime
from typing import Any

from backend.app.models.common import CamelModel


class NewHighlight(CamelModel):
    """Highlight creation draft.

    ``explanation`` is an opaque payload and is stored exactly as given.
    """

    document_id: int
    text: str
    user_id: int | None = None
    note: str | None = None
    explanation: dict[str, Any] | None = None
    start_offset: int | None = None
    end_offset: int | None = None


class Highlight(CamelModel):
    """Stored highlight."""

    id: int
    document_id: int
    user_id: int
    text: str
    note: str | None
    explanation: dict[str, Any] | None
    start_offset: int | None
    end_offset: int | None
    created_at: datetime
