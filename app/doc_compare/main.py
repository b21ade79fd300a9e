"""
FastAPI application for the document comparison service.

Provides a single endpoint:
- POST /compare: compare an uploaded document against the reference PDF
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Handle both package imports (when running as module) and standalone imports (uvicorn main:app)
try:
    from . import __version__
    from .config import Settings, get_settings
    from .exceptions import (
        DocumentComparisonError,
        FileTooLargeError,
        InvalidRequestError,
        NoFileError,
        UnsupportedTypeError,
    )
    from .reference import load_reference_or_empty
    from .routers import compare
except ImportError:
    import sys
    from pathlib import Path
    # Add parent directory to path for standalone imports
    package_dir = Path(__file__).parent
    if str(package_dir) not in sys.path:
        sys.path.insert(0, str(package_dir))
    from config import Settings, get_settings
    from exceptions import (
        DocumentComparisonError,
        FileTooLargeError,
        InvalidRequestError,
        NoFileError,
        UnsupportedTypeError,
    )
    from reference import load_reference_or_empty
    from routers import compare

    __version__ = "1.0.0"

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[DocumentComparisonError], int] = {
    NoFileError: status.HTTP_400_BAD_REQUEST,
    UnsupportedTypeError: status.HTTP_400_BAD_REQUEST,
    FileTooLargeError: 413,
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings
    logger.info("Starting Document Comparison Service...")
    # Loaded once; read-only for the rest of the process
    app.state.reference = load_reference_or_empty(settings.reference_path)
    yield
    logger.info("Shutting down Document Comparison Service...")


async def comparison_error_handler(request: Request, exc: DocumentComparisonError):
    """Translate pipeline errors into ``{"error": ...}`` responses."""
    status_code = ERROR_STATUS_CODES.get(
        type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Comparison request failed: %s", exc, exc_info=exc)
    else:
        logger.warning("Rejected comparison request: %s", exc)

    return JSONResponse(
        status_code=status_code,
        content={"error": exc.client_message},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed form fields with the same ``{"error": ...}`` body."""
    # A form field named "file" that is not an upload counts as no upload
    if any(tuple(error.get("loc", ()))[-1:] == ("file",) for error in exc.errors()):
        error = NoFileError()
    else:
        error = InvalidRequestError(f"Request validation failed: {exc.errors()}")
    return await comparison_error_handler(request, error)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Explicit configuration; defaults to the environment.

    Returns:
        A configured FastAPI instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Document Comparison API",
        description="Word-level comparison of uploaded documents against a reference",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Any origin may call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(compare.router)
    app.add_exception_handler(DocumentComparisonError, comparison_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    return app


# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.doc_compare.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
