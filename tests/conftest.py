import io
from collections.abc import Iterator

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from filingiq.analysis.factory import AnalysisClientFactory
from filingiq.pdf.factory import PdfExtractorFactory


def _pdf(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 20
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture(autouse=True)
def _reset_singletons() -> Iterator[None]:
    PdfExtractorFactory.reset()
    AnalysisClientFactory.reset()
    yield
    PdfExtractorFactory.reset()
    AnalysisClientFactory.reset()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _pdf([["Form W-2 Wage and Tax Statement 2024"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return _pdf([["Page one content"], ["Page two content"]])


@pytest.fixture()
def twelve_page_pdf_bytes() -> bytes:
    return _pdf([[f"Statement page {n}"] for n in range(1, 13)])


@pytest.fixture()
def boilerplate_pdf_bytes() -> bytes:
    """Two pages that repeat the same copy-label line three times each."""
    page = ["Copy B To Be Filed With Employee's Return"] * 3 + ["Wages 85000.00"]
    return _pdf([page, page])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return _pdf([[]])
