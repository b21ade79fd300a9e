"""
Text extraction service for uploaded documents.

Turns PDF (pypdf), Word .docx (python-docx) and plain text buffers into
plain text for comparison.
"""

import io
import logging
from collections.abc import Iterator
from pathlib import Path

import docx
from docx.table import Table
from docx.text.paragraph import Paragraph
from pypdf import PdfReader

# Handle both package imports and standalone imports
try:
    from ..exceptions import ExtractionError, UnsupportedTypeError
    from ..models import DocumentFormat
except ImportError:
    from exceptions import ExtractionError, UnsupportedTypeError
    from models import DocumentFormat

logger = logging.getLogger(__name__)

# Readers accept a header anywhere in the first KiB
PDF_HEADER_WINDOW = 1024


class ExtractionService:
    """
    Service for turning document bytes into plain text.

    Dispatch is over :class:`DocumentFormat`; the declared content type is
    resolved before any parser is touched.
    """

    def extract(self, file_bytes: bytes, content_type: str | None) -> str:
        """
        Extract plain text from a document buffer.

        Args:
            file_bytes: Raw document content.
            content_type: Declared MIME type of the upload.

        Returns:
            The document text.

        Raises:
            UnsupportedTypeError: If the content type is not supported.
            ExtractionError: If the parser fails on the document.
        """
        document_format = DocumentFormat.from_content_type(content_type)
        return self.extract_format(file_bytes, document_format)

    def extract_format(self, file_bytes: bytes, document_format: DocumentFormat) -> str:
        """Extract text from a buffer whose format is already known."""
        match document_format:
            case DocumentFormat.PDF:
                text = self.extract_pdf_text(file_bytes)
            case DocumentFormat.DOCX:
                text = self.extract_docx_text(file_bytes)
            case DocumentFormat.TEXT:
                text = self.decode_plain_text(file_bytes)
            case _:
                raise UnsupportedTypeError(document_format)

        logger.debug(
            "Extracted %d characters from %s document (%d bytes)",
            len(text),
            document_format.name,
            len(file_bytes),
        )
        return text

    def extract_file(self, path: str | Path) -> str:
        """
        Read a local PDF and extract its text.

        Raises:
            ExtractionError: If the file cannot be read or parsed.
        """
        try:
            file_bytes = Path(path).read_bytes()
        except OSError as e:
            raise ExtractionError(f"Could not read {path}: {e}") from e
        return self.extract_pdf_text(file_bytes)

    def extract_pdf_text(self, file_bytes: bytes) -> str:
        """
        Extract text from a PDF, page by page.

        Text fragments within a page are joined with a single space and
        every page is terminated by a newline, so a document with blank
        pages yields only whitespace. Line breaks pypdf attaches to a
        fragment are dropped, as are whitespace-only fragments.

        Raises:
            ExtractionError: If the buffer is not a readable PDF.
        """
        if b"%PDF" not in file_bytes[:PDF_HEADER_WINDOW]:
            raise ExtractionError("Invalid PDF file: does not start with PDF header")

        try:
            reader = PdfReader(io.BytesIO(file_bytes))
            page_texts = []
            for page in reader.pages:
                fragments: list[str] = []

                def collect(text, *_):
                    fragment = text.strip("\r\n")
                    if fragment.strip():
                        fragments.append(fragment)

                page.extract_text(visitor_text=collect)
                page_texts.append(" ".join(fragments) + "\n")
        except Exception as e:
            logger.debug("PDF text extraction failed: %s", e)
            raise ExtractionError(f"Invalid or corrupted PDF file: {e}") from e

        logger.debug("Extracted text from %d PDF page(s)", len(page_texts))
        return "".join(page_texts)

    def extract_docx_text(self, file_bytes: bytes) -> str:
        """
        Extract raw paragraph text from a Word document.

        Paragraphs inside tables are included in document order.

        Raises:
            ExtractionError: If the buffer is not a readable .docx package.
        """
        try:
            document = docx.Document(io.BytesIO(file_bytes))
            paragraphs = list(_iter_paragraph_text(document))
        except Exception as e:
            logger.debug("Word text extraction failed: %s", e)
            raise ExtractionError(f"Invalid or corrupted Word document: {e}") from e

        return "\n".join(paragraphs)

    def decode_plain_text(self, file_bytes: bytes) -> str:
        """Decode a plain text upload as UTF-8, replacing invalid bytes."""
        return file_bytes.decode("utf-8", errors="replace")


def _iter_paragraph_text(container) -> Iterator[str]:
    """Yield paragraph text from a document or table cell, recursing into tables."""
    for block in container.iter_inner_content():
        if isinstance(block, Paragraph):
            yield block.text
        elif isinstance(block, Table):
            for row in block.rows:
                seen = set()
                for cell in row.cells:
                    # Merged cells are repeated once per grid column
                    if id(cell._tc) in seen:
                        continue
                    seen.add(id(cell._tc))
                    yield from _iter_paragraph_text(cell)


# Singleton instance for convenience
_extraction_service: ExtractionService | None = None


def get_extraction_service() -> ExtractionService:
    """Get or create the extraction service singleton."""
    global _extraction_service
    if _extraction_service is None:
        _extraction_service = ExtractionService()
    return _extraction_service


def extract_text(file_bytes: bytes, content_type: str | None) -> str:
    """Extract text from ``file_bytes`` using the shared service."""
    return get_extraction_service().extract(file_bytes, content_type)
