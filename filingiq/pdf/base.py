from abc import ABC, abstractmethod

from filingiq.logging.logger import Log
from filingiq.pdf.compression import compress_text

EMPTY_PDF_SENTINEL = "(No text extracted from PDF)"

DEFAULT_MAX_PAGES = 10
DEFAULT_MAX_CHARS = 12000


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters.

    Adapters only read raw page text; page capping, page labels and
    compression are shared here so every engine produces the same shape.
    """

    def __init__(
        self,
        *,
        max_pages: int = DEFAULT_MAX_PAGES,
        max_chars: int = DEFAULT_MAX_CHARS,
    ) -> None:
        self._max_pages = max_pages
        self._max_chars = max_chars

    @property
    def max_pages(self) -> int:
        return self._max_pages

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract a compressed transcript from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Compressed text, or EMPTY_PDF_SENTINEL when no page has text.

        Raises:
            PdfExtractionError: if the bytes cannot be parsed as a PDF.
        """
        pages, total_pages = self.read_pages(pdf_bytes, self._max_pages)
        if total_pages > len(pages):
            Log.info(f"PDF has {total_pages} pages, extracting the first {len(pages)}")

        page_texts = [_join_runs(text) for text in pages]
        if not any(page_texts):
            return EMPTY_PDF_SENTINEL

        if len(page_texts) == 1:
            raw = page_texts[0]
        else:
            raw = "\n".join(
                f"[Page {number}]\n{text}" for number, text in enumerate(page_texts, start=1)
            )
        return compress_text(raw, self._max_chars)

    @abstractmethod
    def read_pages(self, pdf_bytes: bytes, max_pages: int) -> tuple[list[str], int]:
        """Return raw text of at most ``max_pages`` pages and the document's page count.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """


def _join_runs(page_text: str) -> str:
    lines = (" ".join(line.split()) for line in page_text.splitlines())
    return "\n".join(line for line in lines if line)
