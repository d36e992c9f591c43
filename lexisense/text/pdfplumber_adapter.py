import io

import pdfplumber

from lexisense.text.base import BasePdfExtractor


class PdfPlumberAdapter(BasePdfExtractor):
    """Layout-aware engine; the default for contract uploads."""

    engine = "pdfplumber"

    def _read_pages(self, pdf_bytes: bytes) -> list[str]:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            return [page.extract_text() or "" for page in pdf.pages]
