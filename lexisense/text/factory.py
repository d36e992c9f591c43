from lexisense.config.settings import Settings
from lexisense.logging.logger import Log
from lexisense.text.base import BasePdfExtractor
from lexisense.text.pdfplumber_adapter import PdfPlumberAdapter
from lexisense.text.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Picks the PDF engine named by ``pdf_engine``."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        PdfPlumberAdapter.engine: PdfPlumberAdapter,
        PyMuPdfAdapter.engine: PyMuPdfAdapter,
        "fitz": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        name = settings.pdf_engine.strip().lower()
        adapter_cls = cls.ADAPTERS.get(name)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{name}'. Choose from: {sorted(cls.ADAPTERS)}"
            )
        Log.debug(f"Contract PDFs will be read with {adapter_cls.engine}")
        return adapter_cls()
