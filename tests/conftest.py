import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from lexisense.config.settings import Settings


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known contract text."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Master Services Agreement between Acme Corp and Beta LLC")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one: definitions")
    c.showPage()
    c.drawString(72, 720, "Page two: termination")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def fast_settings() -> Settings:
    """Settings with zero backoff so retry tests do not sleep."""
    return Settings(
        openai_api_key="test-key",
        extraction_backoff_initial_seconds=0.0,
        extraction_backoff_max_seconds=0.0,
        max_chunk_chars=1_000,
    )
