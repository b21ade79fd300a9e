"""
Services package for the document comparison application.

Contains:
- extraction_service: PDF, Word and plain text extraction
- comparison_service: word-level diffing against the reference text
"""

from .comparison_service import ComparisonService
from .extraction_service import ExtractionService

__all__ = ["ComparisonService", "ExtractionService"]
