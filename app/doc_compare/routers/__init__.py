"""
Routers package for FastAPI endpoints.

- compare: upload and comparison against the reference document
"""

from . import compare

__all__ = ["compare"]
