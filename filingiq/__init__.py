from filingiq.analysis.models import AnalysisResult, DocumentAnalysis
from filingiq.analysis.summary import generate_analysis_summary
from filingiq.documents.models import DocumentRef
from filingiq.processor.batch import analyze_documents

__all__ = [
    "AnalysisResult",
    "DocumentAnalysis",
    "DocumentRef",
    "analyze_documents",
    "generate_analysis_summary",
]
