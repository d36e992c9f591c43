class TextExtractionError(Exception):
    """Raised when text cannot be extracted from an uploaded file."""


class PdfExtractionError(TextExtractionError):
    """Raised when a PDF engine fails to read a document."""


class UnsupportedFileTypeError(TextExtractionError):
    """Raised for MIME types the pipeline cannot read."""
