"""Turns uploaded contract files into plain text for analysis."""

from typing import ClassVar

from lexisense.logging.logger import Log
from lexisense.text.base import BasePdfExtractor
from lexisense.text.exceptions import TextExtractionError, UnsupportedFileTypeError

MIME_PDF = "application/pdf"
MIME_TEXT = "text/plain"


class TextExtractor:
    """Validates file signatures and extracts text from PDF or plain-text uploads."""

    FILE_SIGNATURES: ClassVar[dict[str, bytes]] = {
        MIME_PDF: b"%PDF",
    }

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        *,
        min_chars: int = 10,
        max_chars: int = 1_000_000,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._min_chars = min_chars
        self._max_chars = max_chars

    def extract_text(self, data: bytes, mime_type: str) -> str:
        """Extract text from *data* according to *mime_type*.

        Text longer than the configured maximum is truncated.

        Raises:
            UnsupportedFileTypeError: if mime_type is neither PDF nor plain text.
            TextExtractionError: on signature mismatch, decode failure, or
                when too little text was found.
        """
        if mime_type == MIME_PDF:
            self._check_signature(data, mime_type)
            text = self._pdf_extractor.extract(data).strip()
        elif mime_type == MIME_TEXT:
            try:
                text = data.decode("utf-8").strip()
            except UnicodeDecodeError as exc:
                raise TextExtractionError(
                    "Failed to read text file: content is not valid UTF-8"
                ) from exc
        else:
            raise UnsupportedFileTypeError(f"Unsupported file type: {mime_type}")

        if len(text) < self._min_chars:
            raise TextExtractionError("Document appears to be empty or contains no extractable text")

        if len(text) > self._max_chars:
            Log.warning(f"Extracted text truncated from {len(text)} to {self._max_chars} chars")
            text = text[: self._max_chars]
        return text

    def _check_signature(self, data: bytes, mime_type: str) -> None:
        signature = self.FILE_SIGNATURES.get(mime_type)
        if signature is not None and not data.startswith(signature):
            raise TextExtractionError(f"File content does not match declared type {mime_type}")
