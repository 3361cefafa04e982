"""Document service - create documents from URLs and uploaded PDFs."""

import base64
import logging
from typing import cast

from backend.app.db.repositories import EntityStore
from backend.app.docs.extract import ContentExtractor
from backend.app.errors import NotFoundError, ValidationError
from backend.app.models.common import DocumentType, EntityKind
from backend.app.models.docs import Document, NewDocument
from backend.app.utils.metrics import PrometheusRemoteMetrics

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
MAX_PDF_BYTES = 10 * 1024 * 1024


class DocumentService:
    """Validates document requests and persists them in the entity store."""

    def __init__(
        self,
        store: EntityStore,
        extractor: ContentExtractor,
        *,
        max_pdf_bytes: int = MAX_PDF_BYTES,
        metrics: PrometheusRemoteMetrics | None = None,
    ) -> None:
        """Initialize document service.

        Args:
            store: Entity store holding documents
            extractor: Content extractor for URL documents
            max_pdf_bytes: Largest accepted PDF upload, inclusive
            metrics: Optional metrics sink
        """
        self._store = store
        self._extractor = extractor
        self._max_pdf_bytes = max_pdf_bytes
        self._metrics = metrics or PrometheusRemoteMetrics()

    @property
    def max_pdf_bytes(self) -> int:
        """Largest accepted PDF upload in bytes."""
        return self._max_pdf_bytes

    async def create_from_url(
        self, url: str, *, title: str | None = None, user_id: int | None = None
    ) -> Document:
        """Extract a web article and store it as a document.

        Args:
            url: Page to extract
            title: Overrides the extracted title when given
            user_id: Owner (default: the store's default user)

        Returns:
            Stored document with type "url"

        Raises:
            ExtractionError: The page could not be fetched or parsed
        """
        article = await self._extractor.extract(url)

        draft = NewDocument(
            title=title or article.title,
            type=DocumentType.url,
            url=url,
            content=article.content,
            pdf_data=None,
            reading_time=article.estimated_read_time,
            user_id=user_id,
        )
        document = self._insert(draft)
        logger.info("Created url document %d from %s", document.id, url)
        return document

    def create_from_pdf(
        self,
        *,
        title: str,
        file_bytes: bytes,
        mime_type: str | None,
        user_id: int | None = None,
    ) -> Document:
        """Store an uploaded PDF as a document.

        Args:
            title: Document title
            file_bytes: Raw PDF bytes
            mime_type: Media type reported for the upload
            user_id: Owner (default: the store's default user)

        Returns:
            Stored document with type "pdf"

        Raises:
            ValidationError: Missing title, wrong media type, or file too large
        """
        if not title or not title.strip():
            raise ValidationError("Title is required", field="title")
        if mime_type != PDF_MEDIA_TYPE:
            raise ValidationError("Uploaded file is not a PDF", field="file")
        if len(file_bytes) > self._max_pdf_bytes:
            max_mib = self._max_pdf_bytes / (1024 * 1024)
            raise ValidationError(f"PDF file is too large (max {max_mib:g}MB)", field="file")

        draft = NewDocument(
            title=title,
            type=DocumentType.pdf,
            url=None,
            content=None,
            pdf_data=base64.b64encode(file_bytes).decode("ascii"),
            reading_time=None,
            user_id=user_id,
        )
        document = self._insert(draft)
        logger.info("Created pdf document %d (%d bytes)", document.id, len(file_bytes))
        return document

    def get_by_id(self, document_id: int) -> Document | None:
        """Get a document, or None if it does not exist."""
        return cast(Document | None, self._store.get_by_id(EntityKind.document, document_id))

    def require(self, document_id: int) -> Document:
        """Get a document.

        Raises:
            NotFoundError: No document with this id
        """
        document = self.get_by_id(document_id)
        if document is None:
            raise NotFoundError("Document not found")
        return document

    def list_for_user(self, user_id: int) -> list[Document]:
        """List a user's documents, newest first."""
        return cast(
            list[Document], self._store.list_by_parent(EntityKind.document, "user_id", user_id)
        )

    def _insert(self, draft: NewDocument) -> Document:
        document = cast(Document, self._store.insert(EntityKind.document, draft))
        self._metrics.inc_document(document.type.value)
        return document
