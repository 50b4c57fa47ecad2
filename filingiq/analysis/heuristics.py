"""Regex and keyword extraction for model replies that carry no JSON object."""

import re

from filingiq.analysis.models import (
    MAX_NOTES,
    Amount,
    DocumentAnalysis,
    ExtractedData,
    format_usd,
)
from filingiq.analysis.validator import DEFAULT_DOCUMENT_TYPE, bound_summary, parse_amount

RAW_SUMMARY_CHARS = 300
SUMMARY_AMOUNT_COUNT = 3

PROFESSIONAL_REVIEW_NOTE = (
    "This analysis was read from an unstructured response; "
    "consult a tax professional to confirm it before filing."
)

_DOCUMENT_TYPE_RE = re.compile(
    r"document\s+type\s*\**\s*[:\s]\s*\**\s*(?:form\s+)?([A-Za-z0-9][A-Za-z0-9-]*)",
    re.IGNORECASE,
)
_YEAR_RE = re.compile(r"(?:tax\s+)?year\s*\**\s*[:\s]\s*\**\s*(\d{4})\b", re.IGNORECASE)
_CURRENCY_RE = re.compile(r"(-)?\$\s?(-)?(\d[\d,]*(?:\.\d+)?)")

# (keyword in upper-cased, hyphen-free document type, notes added when it matches)
_NOTE_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "W-2",
        (
            "Check your 401(k) or 403(b) elective deferrals against the annual limit "
            "to lower taxable wages.",
            "Compare federal tax withheld with your expected liability and adjust "
            "Form W-4 if you are over- or under-withholding.",
        ),
    ),
    (
        "1099",
        (
            "Make quarterly estimated tax payments on this income to avoid "
            "underpayment penalties.",
            "Consider a SEP-IRA or Solo 401(k) to shelter self-employment income.",
        ),
    ),
    (
        "1098",
        (
            "Compare mortgage interest and other itemized deductions with the "
            "standard deduction.",
        ),
    ),
)


def extract_document_type(text: str) -> str:
    match = _DOCUMENT_TYPE_RE.search(text)
    return match.group(1) if match else DEFAULT_DOCUMENT_TYPE


def extract_year(text: str) -> str | None:
    match = _YEAR_RE.search(text)
    return match.group(1) if match else None


def extract_amounts(text: str) -> list[Amount]:
    """Every ``$1,234.56``-style token as an unlabeled amount; unparseable tokens are dropped."""
    amounts: list[Amount] = []
    for match in _CURRENCY_RE.finditer(text):
        value = parse_amount(match.group(3))
        if value is None:
            continue
        if match.group(1) or match.group(2):
            value = -value
        amounts.append(Amount(label="Amount", value=value))
    return amounts


def strategy_notes(document_type: str) -> list[str]:
    # "W2" and "W-2" match the same rule
    compact = document_type.upper().replace("-", "")
    notes: list[str] = []
    for keyword, rule_notes in _NOTE_RULES:
        if keyword.replace("-", "") in compact:
            notes.extend(rule_notes)
    notes = notes[: MAX_NOTES - 1]
    notes.append(PROFESSIONAL_REVIEW_NOTE)
    return notes


def fallback_summary(
    text: str,
    document_type: str,
    year: str | None,
    amounts: list[Amount],
) -> str:
    excerpt = text.strip()[:RAW_SUMMARY_CHARS]
    if excerpt:
        return bound_summary(excerpt)
    summary = f"{document_type} document for tax year {year or 'not specified'}."
    top = sorted(amounts, key=lambda amount: amount.value, reverse=True)
    if top:
        listed = ", ".join(format_usd(a.value) for a in top[:SUMMARY_AMOUNT_COUNT])
        summary += f" Key amounts: {listed}."
    return summary


def build_heuristic_analysis(text: str) -> DocumentAnalysis:
    document_type = extract_document_type(text)
    year = extract_year(text)
    amounts = extract_amounts(text)
    return DocumentAnalysis(
        document_type=document_type,
        confidence="low",
        extracted_data=ExtractedData(year=year, amounts=amounts),
        summary=fallback_summary(text, document_type, year, amounts),
        notes=strategy_notes(document_type),
    )
