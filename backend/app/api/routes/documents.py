"""Document endpoints - POST /api/documents/url, POST /api/documents/pdf, GET /api/documents."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import Field, HttpUrl

from backend.app.api.auth import get_current_context
from backend.app.api.deps import get_document_service, get_highlight_service
from backend.app.db.context import RequestContext
from backend.app.docs.service import DocumentService
from backend.app.highlights.service import HighlightService
from backend.app.models.common import CamelModel
from backend.app.models.docs import Document
from backend.app.models.highlights import Highlight

router = APIRouter(prefix="/api/documents", tags=["documents"])


class CreateUrlDocumentRequest(CamelModel):
    """Request body for POST /api/documents/url."""

    url: HttpUrl = Field(..., description="Page to extract")
    title: str | None = Field(None, description="Overrides the extracted title")


@router.post("/url", response_model=Document)
async def create_url_document(
    request: CreateUrlDocumentRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    documents: Annotated[DocumentService, Depends(get_document_service)],
) -> Document:
    """Extract a web article and store it as a document.

    Returns:
        Stored document (type "url")
    """
    return await documents.create_from_url(
        str(request.url), title=request.title or None, user_id=ctx.user_id
    )


@router.post("/pdf", response_model=Document)
async def create_pdf_document(
    file: Annotated[UploadFile, File(description="PDF file")],
    title: Annotated[str, Form(min_length=1, description="Document title")],
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    documents: Annotated[DocumentService, Depends(get_document_service)],
) -> Document:
    """Store an uploaded PDF as a document.

    Returns:
        Stored document (type "pdf")
    """
    # The upload is already spooled; copy at most one byte past the limit
    file_bytes = await file.read(documents.max_pdf_bytes + 1)

    return documents.create_from_pdf(
        title=title,
        file_bytes=file_bytes,
        mime_type=file.content_type,
        user_id=ctx.user_id,
    )


@router.get("", response_model=list[Document])
async def list_documents(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    documents: Annotated[DocumentService, Depends(get_document_service)],
) -> list[Document]:
    """List the current user's documents, newest first."""
    return documents.list_for_user(ctx.user_id)


@router.get("/{document_id}", response_model=Document)
async def get_document(
    document_id: int,
    documents: Annotated[DocumentService, Depends(get_document_service)],
) -> Document:
    """Get a single document.

    Raises:
        NotFoundError: Unknown document id (404)
    """
    return documents.require(document_id)


@router.get("/{document_id}/highlights", response_model=list[Highlight])
async def list_document_highlights(
    document_id: int,
    highlights: Annotated[HighlightService, Depends(get_highlight_service)],
) -> list[Highlight]:
    """List a document's highlights, newest first."""
    return highlights.list_for_document(document_id)
