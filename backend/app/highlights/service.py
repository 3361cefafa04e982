"""Highlight service - persist text selections and their explanations."""

import logging
from typing import Any, cast

from backend.app.db.repositories import EntityStore
from backend.app.errors import ValidationError
from backend.app.models.common import EntityKind
from backend.app.models.highlights import Highlight, NewHighlight

logger = logging.getLogger(__name__)


class HighlightService:
    """Stores highlights against documents.

    The parent document is not checked for existence: a highlight may be
    created for a document id that was never issued.
    """

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def add_highlight(
        self,
        *,
        document_id: int,
        text: str,
        user_id: int | None = None,
        note: str | None = None,
        explanation: dict[str, Any] | None = None,
        start_offset: int | None = None,
        end_offset: int | None = None,
    ) -> Highlight:
        """Store a highlight.

        Args:
            document_id: Parent document id (not verified)
            text: Selected text, non-empty
            user_id: Owner (default: the store's default user)
            note: Optional user note
            explanation: Optional AI explanation payload, stored as given
            start_offset: Optional selection start
            end_offset: Optional selection end

        Returns:
            Stored highlight

        Raises:
            ValidationError: Empty text
        """
        if not text:
            raise ValidationError("Text must not be empty", field="text")

        draft = NewHighlight(
            document_id=document_id,
            text=text,
            user_id=user_id,
            note=note,
            explanation=explanation,
            start_offset=start_offset,
            end_offset=end_offset,
        )
        highlight = cast(Highlight, self._store.insert(EntityKind.highlight, draft))
        logger.info("Created highlight %d on document %d", highlight.id, document_id)
        return highlight

    def get_by_id(self, highlight_id: int) -> Highlight | None:
        """Get a highlight, or None if it does not exist."""
        return cast(Highlight | None, self._store.get_by_id(EntityKind.highlight, highlight_id))

    def list_for_document(self, document_id: int) -> list[Highlight]:
        """List a document's highlights, newest first."""
        return cast(
            list[Highlight],
            self._store.list_by_parent(EntityKind.highlight, "document_id", document_id),
        )
