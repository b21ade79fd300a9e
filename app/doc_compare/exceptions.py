"""
Exceptions raised by the comparison pipeline.

Each exception carries the message that is safe to show to API clients.
"""


class DocumentComparisonError(Exception):
    """Base class for comparison service errors."""

    client_message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.client_message)


class NoFileError(DocumentComparisonError):
    """Raised when a request arrives without an uploaded file."""

    client_message = "No file uploaded"


class UnsupportedTypeError(DocumentComparisonError):
    """Raised when the declared content type is not PDF, DOCX or plain text."""

    client_message = "Unsupported file type"

    def __init__(self, content_type: str | None = None):
        self.content_type = content_type
        super().__init__(f"Unsupported content type: {content_type!r}")


class FileTooLargeError(DocumentComparisonError):
    """Raised when an upload exceeds the configured size ceiling."""

    client_message = "File too large"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Upload exceeds {limit} bytes")


class ExtractionError(DocumentComparisonError):
    """Raised when a parser fails on a malformed or corrupt document."""

    pass


class StartupLoadError(DocumentComparisonError):
    """Raised when the reference document cannot be loaded at boot."""

    pass


class InvalidRequestError(DocumentComparisonError):
    """Raised when request fields fail validation."""

    client_message = "Invalid request"
