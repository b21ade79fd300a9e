"""Pytest configuration and fixtures."""

import io
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import docx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pypdf import PdfWriter

from app.doc_compare.config import Settings
from app.doc_compare.main import create_app
from app.doc_compare.models import ReferenceDocument
from app.doc_compare.reference import get_reference_document


def build_pdf(pages: list[list[str]]) -> bytes:
    """
    Build a small PDF with one text line per entry, using Helvetica.

    Object offsets in the xref table are computed so that strict readers
    accept the file.
    """
    page_ids = [4 + 2 * i for i in range(len(pages))]
    kids = " ".join(f"{page_id} 0 R" for page_id in page_ids)

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for page_id, lines in zip(page_ids, pages):
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                "/Resources << /Font << /F1 3 0 R >> >> "
                f"/Contents {page_id + 1} 0 R >>"
            ).encode()
        )
        operators = ["BT", "/F1 12 Tf", "72 720 Td"]
        for index, line in enumerate(lines):
            if index:
                operators.append("0 -16 Td")
            operators.append(f"({line}) Tj")
        operators.append("ET")
        stream = "\n".join(operators).encode()
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_position = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_position,
    )
    return bytes(out)


def build_docx(paragraphs: list[str]) -> bytes:
    """Build a Word document containing the given paragraphs."""
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Two-page PDF with a line of text on each page."""
    return build_pdf([["The quick brown fox"], ["jumps over the lazy dog"]])


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    """A valid PDF with a single empty page."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def empty_docx_bytes() -> bytes:
    """A valid Word document with no added content."""
    return build_docx([])


@pytest.fixture
def sample_docx_bytes() -> bytes:
    """Word document with two paragraphs."""
    return build_docx(["The quick red fox", "jumps over the lazy dog"])


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Bytes that are neither a PDF nor a Word document."""
    return b"This is not a document"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a reference file that does not exist."""
    return Settings(reference_path=tmp_path / "missing.pdf")


@pytest.fixture
def application(settings: Settings) -> Generator[FastAPI, None, None]:
    """A fresh application built from the test settings."""
    app = create_app(settings)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(application: FastAPI) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(application) as test_client:
        yield test_client


@pytest.fixture
def use_reference(application: FastAPI) -> Callable[[str], None]:
    """Return a function that swaps in a reference text for requests."""

    def _use(text: str) -> None:
        reference = ReferenceDocument(text=text, loaded=True)
        application.dependency_overrides[get_reference_document] = lambda: reference

    return _use


@pytest.fixture
def make_pdf() -> Callable[[list[list[str]]], bytes]:
    """Return the PDF builder for tests that need custom pages."""
    return build_pdf


@pytest.fixture
def make_docx() -> Callable[[list[str]], bytes]:
    """Return the Word document builder for tests that need custom paragraphs."""
    return build_docx
