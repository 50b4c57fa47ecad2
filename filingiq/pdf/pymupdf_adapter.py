import pymupdf

from filingiq.pdf.base import BasePdfExtractor
from filingiq.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def read_pages(self, pdf_bytes: bytes, max_pages: int) -> tuple[list[str], int]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                total = doc.page_count
                pages = [doc[index].get_text() for index in range(min(total, max_pages))]
            return pages, total
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
