"""
Document Comparison Backend Application.

A FastAPI service that extracts text from uploaded PDF, Word or plain
text documents and compares it word-by-word against a fixed reference
document.
"""

__version__ = "1.0.0"
