from abc import ABC, abstractmethod
from typing import ClassVar

from lexisense.logging.logger import Log
from lexisense.text.exceptions import PdfExtractionError


class BasePdfExtractor(ABC):
    """Reads contract PDFs page by page.

    Engines implement ``_read_pages`` only. Joining pages, stripping NUL bytes
    and wrapping engine failures happen here, so every engine hands the
    analysis pipeline text of the same shape.
    """

    engine: ClassVar[str]

    def extract(self, pdf_bytes: bytes) -> str:
        """Return the contract text of *pdf_bytes*, one page per line block.

        Raises:
            PdfExtractionError: if the engine cannot read the document. It is a
                TextExtractionError, so upload handling treats it the same way.
        """
        try:
            pages = self._read_pages(pdf_bytes)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(
                f"{self.engine} could not read the contract PDF: {exc}"
            ) from exc
        Log.debug(f"{self.engine} read {len(pages)} page(s)")
        return "\n".join(_clean_page(page) for page in pages).strip()

    @abstractmethod
    def _read_pages(self, pdf_bytes: bytes) -> list[str]:
        """Return the raw text of each page, in page order."""


def _clean_page(page: str) -> str:
    lines = page.replace("\x00", "").splitlines()
    return "\n".join(line.rstrip() for line in lines)
