"""
Pydantic models for the document comparison pipeline.

Defines the supported upload formats, diff segments, comparison
results and the API response shapes.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Handle both package imports and standalone imports
try:
    from .exceptions import UnsupportedTypeError
except ImportError:
    from exceptions import UnsupportedTypeError


class DocumentFormat(str, Enum):
    """Upload formats the extractor understands, keyed by MIME type."""

    PDF = "application/pdf"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    TEXT = "text/plain"

    @classmethod
    def from_content_type(cls, content_type: str | None) -> "DocumentFormat":
        """
        Resolve a declared content type to a supported format.

        MIME parameters (``; charset=...``) and letter case are ignored.

        Raises:
            UnsupportedTypeError: If the type is missing or not supported.
        """
        if not content_type:
            raise UnsupportedTypeError(content_type)
        mime = content_type.split(";", 1)[0].strip().lower()
        try:
            return cls(mime)
        except ValueError:
            raise UnsupportedTypeError(content_type) from None


class SegmentKind(str, Enum):
    """Tag of a contiguous diff segment."""

    UNCHANGED = "unchanged"
    ADDED = "added"  # present only in the candidate
    REMOVED = "removed"  # present only in the reference


class DiffSegment(BaseModel):
    """
    One contiguous run of word tokens sharing the same tag.

    Attributes:
        value: Literal text of the run, whitespace included.
        count: Number of word tokens in the run.
        kind: Whether the run is unchanged, added or removed.
    """

    value: str
    count: int = Field(..., ge=0)
    kind: SegmentKind

    @computed_field
    @property
    def added(self) -> bool:
        return self.kind is SegmentKind.ADDED

    @computed_field
    @property
    def removed(self) -> bool:
        return self.kind is SegmentKind.REMOVED


class ComparisonResult(BaseModel):
    """Word diff between a reference and a candidate text."""

    diff: list[DiffSegment] = Field(default_factory=list)
    missing: list[str] = Field(
        default_factory=list,
        description="Trimmed text of every removed segment, in diff order",
    )
    additional: list[str] = Field(
        default_factory=list,
        description="Trimmed text of every added segment, in diff order",
    )


class ReferenceDocument(BaseModel):
    """
    The baseline document every upload is compared against.

    Built once at startup and never mutated. ``loaded`` is False when the
    reference file could not be read, in which case ``text`` is empty.
    """

    model_config = ConfigDict(frozen=True)

    text: str = ""
    source_path: Path | None = None
    loaded: bool = False


# =============================================================================
# API Response Models
# =============================================================================


class CompareResponse(BaseModel):
    """Response for POST /compare."""

    model_config = ConfigDict(populate_by_name=True)

    diff: list[DiffSegment]
    missing_points: list[str] = Field(..., alias="missingPoints")
    additional_points: list[str] = Field(..., alias="additionalPoints")
    standard_text: str = Field(..., alias="standardText")
    uploaded_text: str = Field(..., alias="uploadedText")


class ErrorResponse(BaseModel):
    """Error body returned for every non-200 response."""

    error: str
