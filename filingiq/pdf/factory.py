from typing import ClassVar

from filingiq.config.settings import Settings
from filingiq.pdf.base import BasePdfExtractor
from filingiq.pdf.pdfplumber_adapter import PdfPlumberAdapter
from filingiq.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the correct PDF extractor based on settings."""

    ADAPTERS: ClassVar[dict[str, type[BasePdfExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    _instances: ClassVar[dict[tuple[str, int, int], BasePdfExtractor]] = {}

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls(max_pages=settings.pdf_max_pages, max_chars=settings.pdf_max_chars)

    @classmethod
    def get(cls, settings: Settings) -> BasePdfExtractor:
        """Return the process-wide extractor for these settings, creating it on first use."""
        key = (settings.pdf_engine.lower(), settings.pdf_max_pages, settings.pdf_max_chars)
        extractor = cls._instances.get(key)
        if extractor is None:
            extractor = cls._instances.setdefault(key, cls.create(settings))
        return extractor

    @classmethod
    def reset(cls) -> None:
        cls._instances.clear()
