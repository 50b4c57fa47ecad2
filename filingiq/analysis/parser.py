"""Turns the model's free-form reply into a DocumentAnalysis.

Structured strategies are tried in order; the first one that recovers a
JSON object wins. When none does, the reply is mined heuristically and the
result is marked low confidence.
"""

import json
import re
from collections.abc import Callable
from typing import Any

from filingiq.analysis.heuristics import build_heuristic_analysis
from filingiq.analysis.models import DocumentAnalysis
from filingiq.analysis.validator import build_structured_analysis
from filingiq.logging.logger import Log

StructuredStrategy = Callable[[str], dict[str, Any] | None]

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*(\{[\s\S]*\})\s*```", re.IGNORECASE)


def _load_object(text: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def from_fenced_block(text: str) -> dict[str, Any] | None:
    match = _FENCED_JSON_RE.search(text)
    return _load_object(match.group(1)) if match else None


def from_whole_reply(text: str) -> dict[str, Any] | None:
    return _load_object(text.strip())


def from_embedded_object(text: str) -> dict[str, Any] | None:
    """First JSON object embedded in prose, e.g. ``Here it is: {...} Thanks.``"""
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            parsed, _ = decoder.raw_decode(text, start)
        except (ValueError, RecursionError):
            start = text.find("{", start + 1)
            continue
        if isinstance(parsed, dict):
            return parsed
        start = text.find("{", start + 1)
    return None


STRUCTURED_STRATEGIES: tuple[StructuredStrategy, ...] = (
    from_fenced_block,
    from_whole_reply,
    from_embedded_object,
)


def parse_analysis_response(raw_text: str) -> DocumentAnalysis:
    """Parse a model reply. Never raises."""
    for strategy in STRUCTURED_STRATEGIES:
        data = strategy(raw_text)
        if data is not None:
            Log.debug(f"Parsed structured analysis via {strategy.__name__}")
            return build_structured_analysis(data, raw_text)
    Log.info("No JSON object in AI response, falling back to heuristic parsing")
    return build_heuristic_analysis(raw_text)
