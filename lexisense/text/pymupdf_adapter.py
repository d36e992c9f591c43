import pymupdf

from lexisense.text.base import BasePdfExtractor
from lexisense.text.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Faster engine for large scanned-then-OCRed contracts."""

    engine = "pymupdf"

    def _read_pages(self, pdf_bytes: bytes) -> list[str]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            if doc.needs_pass:
                raise PdfExtractionError("Contract PDF is password protected")
            return [page.get_text() for page in doc]
