import asyncio
from collections.abc import Sequence

from filingiq.analysis.models import AnalysisResult
from filingiq.config.settings import Settings
from filingiq.documents.models import DocumentRef
from filingiq.logging.logger import Log
from filingiq.processor.processor import DocumentProcessor, build_processor


class BatchAnalyzer:
    """Analyzes a document set in fixed-size concurrent windows.

    Documents inside a window run concurrently; windows run one after
    another, so at most ``concurrency`` model calls are in flight. Results
    come back in input order.
    """

    def __init__(self, processor: DocumentProcessor, concurrency: int) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self._processor = processor
        self._concurrency = concurrency

    async def analyze(
        self,
        documents: Sequence[DocumentRef],
        filing_status: str | None = None,
    ) -> list[AnalysisResult]:
        results: list[AnalysisResult] = []
        for start in range(0, len(documents), self._concurrency):
            window = documents[start : start + self._concurrency]
            results.extend(
                await asyncio.gather(
                    *(self._processor.process(document, filing_status) for document in window)
                )
            )
        succeeded = sum(1 for result in results if result.succeeded)
        Log.info(f"Batch complete: {succeeded} of {len(results)} documents analyzed")
        return results


async def analyze_documents(
    documents: Sequence[DocumentRef],
    filing_status: str | None = None,
    *,
    settings: Settings | None = None,
) -> list[AnalysisResult]:
    """Analyze uploaded documents; one AnalysisResult per input, in input order.

    Per-document failures are reported in the results. Only a malformed
    input list raises.
    """
    if not documents:
        return []
    for document in documents:
        if not isinstance(document, DocumentRef):
            raise TypeError(f"Expected DocumentRef, got {type(document).__name__}")

    settings = settings if settings is not None else Settings()
    analyzer = BatchAnalyzer(build_processor(settings), settings.analysis_concurrency)
    return await analyzer.analyze(documents, filing_status)
