from filingiq.analysis.factory import AnalysisClientFactory
from filingiq.analysis.models import AnalysisResult, DocumentAnalysis
from filingiq.analysis.parser import parse_analysis_response
from filingiq.analysis.prompt_client import AnalysisPromptClient
from filingiq.analysis.summary import generate_analysis_summary

__all__ = [
    "AnalysisClientFactory",
    "AnalysisPromptClient",
    "AnalysisResult",
    "DocumentAnalysis",
    "generate_analysis_summary",
    "parse_analysis_response",
]
