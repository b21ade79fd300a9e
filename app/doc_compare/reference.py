"""
Reference document loading and request-scoped dependencies.

The reference document is extracted once when the application starts
and stored on ``app.state``; request handlers receive it through
FastAPI dependency injection.
"""

import logging
from pathlib import Path

from fastapi import Request

# Handle both package imports and standalone imports
try:
    from .config import Settings, get_settings
    from .exceptions import ExtractionError, StartupLoadError
    from .models import ReferenceDocument
    from .services.extraction_service import ExtractionService, get_extraction_service
except ImportError:
    from config import Settings, get_settings
    from exceptions import ExtractionError, StartupLoadError
    from models import ReferenceDocument
    from services.extraction_service import ExtractionService, get_extraction_service

logger = logging.getLogger(__name__)


def load_reference_document(
    path: str | Path,
    extraction_service: ExtractionService | None = None,
) -> ReferenceDocument:
    """
    Read and extract the reference PDF.

    Args:
        path: Location of the reference PDF.
        extraction_service: Extractor to use; defaults to the shared one.

    Returns:
        A loaded ReferenceDocument.

    Raises:
        StartupLoadError: If the file cannot be read or parsed.
    """
    service = extraction_service or get_extraction_service()
    try:
        text = service.extract_file(path)
    except ExtractionError as e:
        raise StartupLoadError(f"Could not load reference document {path}: {e}") from e

    logger.info("Reference document loaded from %s (%d characters)", path, len(text))
    return ReferenceDocument(text=text, source_path=Path(path), loaded=True)


def load_reference_or_empty(path: str | Path) -> ReferenceDocument:
    """
    Load the reference document, degrading to empty text on failure.

    A missing or corrupt reference file does not stop the service; every
    comparison then runs against an empty reference.
    """
    try:
        return load_reference_document(path)
    except StartupLoadError:
        logger.exception(
            "Reference document unavailable; comparisons will use an empty reference"
        )
        return ReferenceDocument(source_path=Path(path), loaded=False)


# =============================================================================
# Dependencies
# =============================================================================


def get_reference_document(request: Request) -> ReferenceDocument:
    """Return the reference document built during application startup."""
    return getattr(request.app.state, "reference", None) or ReferenceDocument()


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()
