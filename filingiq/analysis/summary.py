from collections.abc import Sequence

from filingiq.analysis.models import AnalysisResult, format_usd

NOTHING_ANALYZED = "No documents were successfully analyzed."
SUMMARY_EXCERPT_CHARS = 100


def generate_analysis_summary(results: Sequence[AnalysisResult]) -> str:
    """Digest of a batch of analyses, e.g. for the intake notification email."""
    successful = [
        (result.filename, result.analysis) for result in results if result.analysis is not None
    ]
    if not successful:
        return NOTHING_ANALYZED

    lines = [f"Analyzed {len(successful)} of {len(results)} document(s):"]
    for filename, analysis in successful:
        data = analysis.extracted_data
        lines.append("")
        lines.append(f"- {filename}")
        lines.append(f"   Type: {analysis.document_type} ({analysis.confidence} confidence)")
        if data.year:
            lines.append(f"   Year: {data.year}")
        if data.amounts:
            lines.append(f"   Total Amounts: {format_usd(data.total_amount)}")
        excerpt = analysis.summary[:SUMMARY_EXCERPT_CHARS]
        if len(analysis.summary) > SUMMARY_EXCERPT_CHARS:
            excerpt += "..."
        lines.append(f"   Summary: {excerpt}")
    return "\n".join(lines)
