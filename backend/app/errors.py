"""Error taxonomy shared by services and the request layer.

Each error carries the HTTP status it maps to and a message that is safe to
show to the client. Context useful only for logs (remote service, operation,
target) is kept on the exception but never rendered in a response.
"""

from typing import Any


class ReaderError(Exception):
    """Base class for errors the request layer knows how to translate."""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)
        self.message = message or self.public_message

    def to_response(self) -> dict[str, Any]:
        """Render the client-facing error body."""
        return {"message": self.message}


class ValidationError(ReaderError):
    """Malformed or out-of-range input."""

    status_code = 400
    public_message = "Validation error"

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def to_response(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.public_message}
        body["details"] = [{"field": self.field, "message": self.message}]
        return body


class NotFoundError(ReaderError):
    """Referenced entity does not exist."""

    status_code = 404
    public_message = "Not found"


class RemoteServiceError(ReaderError):
    """Extraction or AI call failed or timed out."""

    status_code = 500
    public_message = "The remote service is unavailable. Please try again later."

    def __init__(
        self,
        message: str | None = None,
        *,
        service: str | None = None,
        operation: str | None = None,
        target: str | None = None,
    ) -> None:
        super().__init__(message)
        self.service = service
        self.operation = operation
        self.target = target

    def to_response(self) -> dict[str, Any]:
        # Collaborator details stay in the logs
        return {"message": self.public_message}


class ExtractionError(RemoteServiceError):
    """A URL could not be fetched or turned into a readable article."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        super().__init__(
            reason or "extraction failed",
            service="extractor",
            operation="extract",
            target=url,
        )
        self.url = url

    def to_response(self) -> dict[str, Any]:
        return {"message": f"Failed to extract content from URL: {self.url}"}


class InternalError(ReaderError):
    """Anything unanticipated."""

    status_code = 500
    public_message = "Internal server error"

    def to_response(self) -> dict[str, Any]:
        return {"message": self.public_message}
