"""Builds a DocumentAnalysis from a model-supplied JSON object.

Every field is checked on its own and replaced by a default when it is
missing or has the wrong shape; nothing here raises.
"""

import math
import re
from typing import Any

from filingiq.analysis.models import (
    CONFIDENCE_LEVELS,
    MAX_NOTES,
    MAX_SUMMARY_CHARS,
    Amount,
    Confidence,
    DateEntry,
    DocumentAnalysis,
    ExtractedData,
)

DEFAULT_DOCUMENT_TYPE = "Unknown"
DEFAULT_CONFIDENCE: Confidence = "medium"
RAW_SUMMARY_CHARS = 200

_KNOWN_DATA_KEYS = frozenset(
    {"year", "amounts", "employer", "payer", "recipient", "dates", "other"}
)
_NUMBER_CLEANUP_RE = re.compile(r"[$,\s]")


def parse_amount(raw: Any) -> float | None:
    """Parse a number or currency-like string; None when it is not a finite number.

    ``"$1,234.56"`` -> 1234.56, ``"(250.00)"`` -> -250.0, ``"abc"`` -> None.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return None
    elif isinstance(raw, str):
        text = _NUMBER_CLEANUP_RE.sub("", raw)
        negative = text.startswith("(") and text.endswith(")")
        if negative:
            text = text[1:-1]
        try:
            value = float(text)
        except ValueError:
            return None
        if negative:
            value = -value
    else:
        return None
    return value if math.isfinite(value) else None


def build_structured_analysis(data: dict[str, Any], raw_text: str) -> DocumentAnalysis:
    """Map a parsed JSON object onto DocumentAnalysis, defaulting bad fields."""
    return DocumentAnalysis(
        document_type=_build_text(data.get("documentType")) or DEFAULT_DOCUMENT_TYPE,
        confidence=_build_confidence(data.get("confidence")),
        extracted_data=build_extracted_data(data.get("extractedData")),
        summary=_build_summary(data.get("summary"), raw_text),
        notes=build_notes(data.get("notes")),
    )


def build_extracted_data(raw: Any) -> ExtractedData:
    if not isinstance(raw, dict):
        return ExtractedData()
    other = _build_other(raw.get("other"))
    # Scalar fields the model invents outside the schema are kept under "other".
    for key, value in raw.items():
        if key not in _KNOWN_DATA_KEYS and _is_scalar(value):
            other.setdefault(str(key), value)
    return ExtractedData(
        year=_build_year(raw.get("year")),
        amounts=_build_amounts(raw.get("amounts")),
        employer=_build_text(raw.get("employer")),
        payer=_build_text(raw.get("payer")),
        recipient=_build_text(raw.get("recipient")),
        dates=_build_dates(raw.get("dates")),
        other=other,
    )


def build_notes(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    notes = [item.strip() for item in raw if isinstance(item, str) and item.strip()]
    return notes[:MAX_NOTES]


def bound_summary(summary: str) -> str:
    summary = summary.strip()
    if len(summary) <= MAX_SUMMARY_CHARS:
        return summary
    return summary[: MAX_SUMMARY_CHARS - 3].rstrip() + "..."


def _build_confidence(raw: Any) -> Confidence:
    if not isinstance(raw, str):
        return DEFAULT_CONFIDENCE
    level = raw.strip().lower()
    # "low" is reserved for replies that had to be parsed heuristically.
    if level not in CONFIDENCE_LEVELS or level == "low":
        return DEFAULT_CONFIDENCE
    return level  # type: ignore[return-value]


def _build_summary(raw: Any, raw_text: str) -> str:
    summary = _build_text(raw)
    if summary is None:
        summary = raw_text.strip()[:RAW_SUMMARY_CHARS]
    return bound_summary(summary)


def _build_text(raw: Any) -> str | None:
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        return str(raw)
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return None


def _build_year(raw: Any) -> str | None:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return str(raw)
    return _build_text(raw)


def _build_amounts(raw: Any) -> list[Amount]:
    if not isinstance(raw, list):
        return []
    amounts: list[Amount] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        value = parse_amount(item.get("value"))
        if value is None:
            continue
        amounts.append(
            Amount(
                label=_build_text(item.get("label")) or "Amount",
                value=value,
                description=_build_text(item.get("description")),
            )
        )
    return amounts


def _build_dates(raw: Any) -> list[DateEntry]:
    if not isinstance(raw, list):
        return []
    dates: list[DateEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        value = _build_text(item.get("value"))
        if value is None:
            continue
        dates.append(DateEntry(label=_build_text(item.get("label")) or "Date", value=value))
    return dates


def _build_other(raw: Any) -> dict[str, str | int | float]:
    if not isinstance(raw, dict):
        return {}
    return {str(key): value for key, value in raw.items() if _is_scalar(value)}


def _is_scalar(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, (str, int))
