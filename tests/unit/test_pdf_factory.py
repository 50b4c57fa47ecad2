import pytest

from filingiq.config.settings import Settings
from filingiq.pdf.factory import PdfExtractorFactory
from filingiq.pdf.pdfplumber_adapter import PdfPlumberAdapter
from filingiq.pdf.pymupdf_adapter import PyMuPdfAdapter


class TestPdfExtractorFactory:
    def test_creates_pdfplumber_by_default(self) -> None:
        assert isinstance(PdfExtractorFactory.create(Settings()), PdfPlumberAdapter)

    def test_creates_pymupdf(self) -> None:
        extractor = PdfExtractorFactory.create(Settings(pdf_engine="PyMuPDF"))
        assert isinstance(extractor, PyMuPdfAdapter)

    def test_passes_page_cap(self) -> None:
        extractor = PdfExtractorFactory.create(Settings(pdf_max_pages=4))
        assert extractor.max_pages == 4

    def test_unknown_engine_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfExtractorFactory.create(Settings(pdf_engine="tesseract"))


class TestPdfExtractorSingleton:
    def test_get_returns_same_instance(self) -> None:
        settings = Settings()
        assert PdfExtractorFactory.get(settings) is PdfExtractorFactory.get(settings)

    def test_get_distinguishes_limits(self) -> None:
        first = PdfExtractorFactory.get(Settings(pdf_max_pages=2))
        second = PdfExtractorFactory.get(Settings(pdf_max_pages=3))
        assert first is not second

    def test_reset_drops_instances(self) -> None:
        settings = Settings()
        first = PdfExtractorFactory.get(settings)
        PdfExtractorFactory.reset()
        assert PdfExtractorFactory.get(settings) is not first
