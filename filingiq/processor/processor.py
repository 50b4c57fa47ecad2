import asyncio
import base64

from filingiq.analysis.factory import AnalysisClientFactory
from filingiq.analysis.models import AnalysisResult
from filingiq.analysis.parser import parse_analysis_response
from filingiq.analysis.prompt_client import AnalysisPromptClient
from filingiq.config.settings import Settings
from filingiq.documents.exceptions import DocumentTooLargeError
from filingiq.documents.fetcher import ContentFetcher, build_content_fetcher
from filingiq.documents.models import (
    DocumentRef,
    ExtractedContent,
    FetchedDocument,
    ImageContent,
    TextContent,
    image_format_for,
)
from filingiq.logging.logger import Log
from filingiq.pdf.base import BasePdfExtractor
from filingiq.pdf.factory import PdfExtractorFactory

NOT_CONFIGURED_MESSAGE = (
    "AI analysis unavailable: no API key is configured. "
    "Set OPENAI_API_KEY and restart to enable document analysis."
)


class DocumentProcessor:
    """Runs one document through the pipeline.

    Pipeline: fetch -> extract (PDF text | base64 image) -> prompt -> parse.
    Failures are converted into the document's AnalysisResult and never raised.
    """

    def __init__(
        self,
        *,
        fetcher: ContentFetcher,
        pdf_extractor: BasePdfExtractor,
        prompt_client: AnalysisPromptClient,
        max_image_bytes: int,
    ) -> None:
        self._fetcher = fetcher
        self._pdf_extractor = pdf_extractor
        self._prompt_client = prompt_client
        self._max_image_bytes = max_image_bytes

    async def process(
        self,
        document: DocumentRef,
        filing_status: str | None = None,
    ) -> AnalysisResult:
        Log.info(f"Analyzing document {document.filename}")
        try:
            fetched = await self._fetcher.fetch(document)
            content = await self._extract(document, fetched)
            raw = await self._prompt_client.analyze(content, document.filename, filing_status)
            if raw is None:
                return AnalysisResult(
                    filename=document.filename,
                    analysis=None,
                    error=NOT_CONFIGURED_MESSAGE,
                )
            analysis = parse_analysis_response(raw)
        except Exception as exc:
            Log.error(f"Analysis of {document.filename} failed: {exc}")
            return AnalysisResult(filename=document.filename, analysis=None, error=str(exc))

        Log.info(
            f"Analyzed {document.filename}: {analysis.document_type} "
            f"({analysis.confidence} confidence)"
        )
        return AnalysisResult(filename=document.filename, analysis=analysis)

    async def _extract(self, document: DocumentRef, fetched: FetchedDocument) -> ExtractedContent:
        if fetched.is_pdf:
            text = await asyncio.to_thread(self._pdf_extractor.extract, fetched.data)
            Log.info(f"Extracted {len(text)} chars from {document.filename}")
            return TextContent(value=text)

        if len(fetched.data) > self._max_image_bytes:
            raise DocumentTooLargeError(
                f"File too large for analysis: {document.filename} is "
                f"{len(fetched.data)} bytes (max {self._max_image_bytes})"
            )
        return ImageContent(
            base64=base64.b64encode(fetched.data).decode("ascii"),
            format=image_format_for(fetched.mime_type),
        )


def build_prompt_client(settings: Settings) -> AnalysisPromptClient:
    return AnalysisPromptClient(
        client=AnalysisClientFactory.get(settings),
        model=settings.openai_model_name,
        temperature=settings.openai_temperature,
        max_tokens=settings.openai_max_tokens,
    )


def build_processor(settings: Settings) -> DocumentProcessor:
    """Build a DocumentProcessor with all required adapters."""
    return DocumentProcessor(
        fetcher=build_content_fetcher(settings),
        pdf_extractor=PdfExtractorFactory.get(settings),
        prompt_client=build_prompt_client(settings),
        max_image_bytes=settings.max_image_bytes,
    )
