"""Highlight endpoints - POST /api/highlights, GET /api/highlights/{id}."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import Field

from backend.app.api.auth import get_current_context
from backend.app.api.deps import get_highlight_service
from backend.app.db.context import RequestContext
from backend.app.errors import NotFoundError
from backend.app.highlights.service import HighlightService
from backend.app.models.common import CamelModel
from backend.app.models.highlights import Highlight

router = APIRouter(prefix="/api/highlights", tags=["highlights"])


class CreateHighlightRequest(CamelModel):
    """Request body for POST /api/highlights."""

    document_id: int
    text: str = Field(..., min_length=1)
    note: str | None = None
    start_offset: int | None = None
    end_offset: int | None = None


@router.post("", response_model=Highlight)
async def create_highlight(
    request: CreateHighlightRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    highlights: Annotated[HighlightService, Depends(get_highlight_service)],
) -> Highlight:
    """Store a highlight.

    The parent document is not checked for existence.
    """
    return highlights.add_highlight(
        document_id=request.document_id,
        text=request.text,
        user_id=ctx.user_id,
        note=request.note,
        start_offset=request.start_offset,
        end_offset=request.end_offset,
    )


@router.get("/{highlight_id}", response_model=Highlight)
async def get_highlight(
    highlight_id: int,
    highlights: Annotated[HighlightService, Depends(get_highlight_service)],
) -> Highlight:
    """Get a single highlight."""
    highlight = highlights.get_by_id(highlight_id)
    if highlight is None:
        raise NotFoundError("Highlight not found")
    return highlight
