"""FastAPI application - reading assistant API."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.app.api.routes.ai import router as ai_router
from backend.app.api.routes.documents import router as documents_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.highlights import router as highlights_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.config import Settings, get_settings
from backend.app.db.inmemory import InMemoryEntityStore
from backend.app.db.repositories import EntityStore
from backend.app.docs.extract import ContentExtractor, ReadabilityExtractor
from backend.app.docs.service import DocumentService
from backend.app.errors import InternalError, ReaderError, RemoteServiceError
from backend.app.highlights.service import HighlightService
from backend.app.llm.client import AIClient, get_ai_client
from backend.app.utils.logging import configure_logging

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


async def handle_reader_error(request: Request, exc: ReaderError) -> JSONResponse:
    """Translate service errors into their HTTP responses."""
    if isinstance(exc, RemoteServiceError):
        logger.error(
            f"Remote failure on {request.url.path}: {exc.message}",
            extra={
                "structured": {
                    "service": exc.service,
                    "operation": exc.operation,
                    "target": exc.target,
                }
            },
        )
    elif exc.status_code >= 500:
        logger.error(f"Error on {request.url.path}: {exc.message}")

    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report schema validation failures as 400 with field-level detail."""
    details = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix from the location
        loc = [str(part) for part in error.get("loc", ())[1:]]
        details.append({"field": ".".join(loc) or None, "message": error.get("msg", "")})

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation error", "details": details},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log and return a generic 500."""
    logger.exception(f"Unhandled error on {request.url.path}", exc_info=exc)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_response())


def create_app(
    settings: Settings | None = None,
    *,
    store: EntityStore | None = None,
    extractor: ContentExtractor | None = None,
    ai_client: AIClient | None = None,
) -> FastAPI:
    """Build the application and its collaborators.

    Args:
        settings: Settings (default: environment-derived settings)
        store: Entity store (default: a fresh in-memory store)
        extractor: Content extractor (default: readability over httpx)
        ai_client: AI client (default: OpenAI when a key is configured, else stub)

    Returns:
        Configured FastAPI app with a seeded store
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    store = store or InMemoryEntityStore()
    store.seed(settings.seed_username, settings.seed_password)

    extractor = extractor or ReadabilityExtractor(
        timeout_seconds=settings.extraction_timeout_seconds,
        user_agent=settings.extraction_user_agent,
        words_per_minute=settings.words_per_minute,
    )
    ai_client = ai_client or get_ai_client(settings)

    app = FastAPI(title="Reading Assistant API", version=VERSION)

    app.state.settings = settings
    app.state.store = store
    app.state.ai_client = ai_client
    app.state.document_service = DocumentService(
        store, extractor, max_pdf_bytes=settings.max_pdf_bytes
    )
    app.state.highlight_service = HighlightService(store)

    app.add_exception_handler(ReaderError, handle_reader_error)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, handle_request_validation_error  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Register routes
    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(documents_router)
    app.include_router(highlights_router)
    app.include_router(ai_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Reading Assistant API", "version": VERSION}

    return app


app = create_app()
