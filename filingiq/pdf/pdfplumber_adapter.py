import io

import pdfplumber

from filingiq.pdf.base import BasePdfExtractor
from filingiq.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def read_pages(self, pdf_bytes: bytes, max_pages: int) -> tuple[list[str], int]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                total = len(pdf.pages)
                pages = [page.extract_text() or "" for page in pdf.pages[:max_pages]]
            return pages, total
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
