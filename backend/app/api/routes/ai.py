"""AI endpoints - POST /api/ai/explain, /api/ai/summarize, /api/ai/sources."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from backend.app.api.auth import get_current_context
from backend.app.api.deps import get_ai, get_document_service, get_highlight_service
from backend.app.db.context import RequestContext
from backend.app.docs.extract import html_to_text
from backend.app.docs.service import DocumentService
from backend.app.errors import ValidationError
from backend.app.highlights.service import HighlightService
from backend.app.llm.client import AIClient
from backend.app.models.ai import Explanation, Source
from backend.app.models.common import CamelModel

router = APIRouter(prefix="/api/ai", tags=["ai"])
logger = logging.getLogger(__name__)


class ExplainRequest(CamelModel):
    """Request body for POST /api/ai/explain."""

    text: str = Field(..., min_length=1)
    document_id: int | None = None


class ExplainResponse(BaseModel):
    """Response for POST /api/ai/explain."""

    explanation: Explanation


class SummarizeRequest(CamelModel):
    """Request body for POST /api/ai/summarize.

    One of ``document_id`` and ``text`` is required; ``document_id`` wins when
    both are given.
    """

    document_id: int | None = None
    text: str | None = None


class SummarizeResponse(BaseModel):
    """Response for POST /api/ai/summarize."""

    summary: str


class SourcesRequest(BaseModel):
    """Request body for POST /api/ai/sources."""

    text: str = Field(..., min_length=1)


class SourcesResponse(BaseModel):
    """Response for POST /api/ai/sources."""

    sources: list[Source]


@router.post("/explain", response_model=ExplainResponse, response_model_exclude_none=True)
async def explain(
    request: ExplainRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    ai: Annotated[AIClient, Depends(get_ai)],
    highlights: Annotated[HighlightService, Depends(get_highlight_service)],
) -> ExplainResponse:
    """Explain a text selection.

    When ``documentId`` is given the selection and its explanation are also
    saved as a highlight on that document.
    """
    explanation = await ai.explain(request.text)

    if request.document_id is not None:
        highlights.add_highlight(
            document_id=request.document_id,
            text=request.text,
            user_id=ctx.user_id,
            explanation=explanation.model_dump(exclude_none=True),
        )

    return ExplainResponse(explanation=explanation)


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize(
    request: SummarizeRequest,
    ai: Annotated[AIClient, Depends(get_ai)],
    documents: Annotated[DocumentService, Depends(get_document_service)],
) -> SummarizeResponse:
    """Summarize a stored document or a piece of text.

    Raises:
        ValidationError: Neither input given, or the document has no text content (400)
        NotFoundError: Unknown document id (404)
    """
    if request.document_id is not None:
        document = documents.require(request.document_id)
        if not document.content:
            raise ValidationError("Document has no content to summarize", field="documentId")
        text = html_to_text(document.content)
    elif request.text:
        text = request.text
    else:
        raise ValidationError("Either documentId or text must be provided", field="documentId")

    summary = await ai.summarize(text)
    return SummarizeResponse(summary=summary)


@router.post("/sources", response_model=SourcesResponse)
async def find_sources(
    request: SourcesRequest,
    ai: Annotated[AIClient, Depends(get_ai)],
) -> SourcesResponse:
    """Suggest related sources for further reading."""
    result = await ai.find_sources(request.text)
    return SourcesResponse(sources=result.sources)
