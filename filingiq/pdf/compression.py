"""Shrinks extracted PDF text before it is sent to the model."""

import re

TRUNCATION_MARKER = " [...truncated]"

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_duplicate_lines(text: str) -> str:
    """Drop blank lines and lines identical to the previous kept line.

    Templated tax forms repeat boilerplate (copy labels, instructions) on
    consecutive lines; only the first of each run is kept.
    """
    kept: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if kept and kept[-1] == stripped:
            continue
        kept.append(stripped)
    return "\n".join(kept)


def truncate(text: str, max_chars: int) -> str:
    """Cut text to ``max_chars`` and append the truncation marker when cut."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + TRUNCATION_MARKER


def compress_text(text: str, max_chars: int) -> str:
    deduplicated = collapse_duplicate_lines(text)
    collapsed = _WHITESPACE_RE.sub(" ", deduplicated).strip()
    return truncate(collapsed, max_chars)
