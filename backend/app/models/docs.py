"""Document domain models."""

from datetime import datetime

from pydantic import Field, model_validator

from backend.app.models.common import CamelModel, DocumentType


class NewDocument(CamelModel):
    """Document creation draft.

    Exactly one of ``content`` (HTML, for ``url`` documents) and ``pdf_data``
    (base64, for ``pdf`` documents) is set, matching ``type``. ``user_id`` is
    filled with the default owner by the store when left unset.
    """

    title: str
    type: DocumentType
    url: str | None = None
    content: str | None = None
    pdf_data: str | None = None
    reading_time: int | None = Field(None, ge=0)
    user_id: int | None = None

    @model_validator(mode="after")
    def check_payload_matches_type(self) -> "NewDocument":
        if self.type == DocumentType.url:
            if self.content is None or self.pdf_data is not None:
                raise ValueError("url documents carry content and no pdf_data")
        elif self.pdf_data is None or self.content is not None:
            raise ValueError("pdf documents carry pdf_data and no content")
        return self


class Document(CamelModel):
    """Stored document."""

    id: int
    user_id: int
    title: str
    url: str | None
    type: DocumentType
    content: str | None
    pdf_data: str | None
    added_at: datetime
    reading_time: int | None


class ExtractedArticle(CamelModel):
    """Readable article produced by the content extractor."""

    content: str
    title: str
    estimated_read_time: int
