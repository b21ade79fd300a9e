"""
Router for the document comparison endpoint.

Handles:
- Upload of a PDF, Word or plain text document
- Word-level comparison against the reference document
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

# Handle both package imports and standalone imports
try:
    from ..config import Settings
    from ..exceptions import DocumentComparisonError, FileTooLargeError, NoFileError
    from ..models import CompareResponse, DocumentFormat, ErrorResponse, ReferenceDocument
    from ..reference import get_app_settings, get_reference_document
    from ..services.comparison_service import get_comparison_service
    from ..services.extraction_service import get_extraction_service
except ImportError:
    from config import Settings
    from exceptions import DocumentComparisonError, FileTooLargeError, NoFileError
    from models import CompareResponse, DocumentFormat, ErrorResponse, ReferenceDocument
    from reference import get_app_settings, get_reference_document
    from services.comparison_service import get_comparison_service
    from services.extraction_service import get_extraction_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["compare"])


@router.post(
    "/compare",
    response_model=CompareResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def compare_document(
    reference: Annotated[ReferenceDocument, Depends(get_reference_document)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    file: Annotated[
        UploadFile | None, File(description="PDF, Word or plain text document")
    ] = None,
) -> CompareResponse:
    """
    Compare an uploaded document against the reference document.

    Returns the full word diff, the trimmed text of every removed segment
    (missing points), of every added segment (additional points) and both
    source texts.
    """
    if file is None:
        raise NoFileError()

    try:
        # Resolve the format before reading so unsupported uploads are never parsed
        document_format = DocumentFormat.from_content_type(file.content_type)

        file_bytes = await file.read(settings.max_upload_bytes + 1)
        if len(file_bytes) > settings.max_upload_bytes:
            raise FileTooLargeError(settings.max_upload_bytes)

        logger.info(
            "Comparing upload: %s (%s, %d bytes)",
            file.filename,
            document_format.name,
            len(file_bytes),
        )

        uploaded_text = await run_in_threadpool(
            get_extraction_service().extract_format, file_bytes, document_format
        )
        result = await run_in_threadpool(
            get_comparison_service().compare, reference.text, uploaded_text
        )

        return CompareResponse(
            diff=result.diff,
            missing_points=result.missing,
            additional_points=result.additional,
            standard_text=reference.text,
            uploaded_text=uploaded_text,
        )

    except DocumentComparisonError:
        raise
    except Exception as e:
        raise DocumentComparisonError(f"Comparison failed: {e}") from e
    finally:
        await file.close()
