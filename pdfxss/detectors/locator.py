"""Locate pattern matches in text."""

from __future__ import annotations

import re
from collections.abc import Iterator

from models import Finding, Location, Pattern
from pdfxss.options import DEFAULT_CONTEXT_WINDOW


def line_and_column(text: str, offset: int) -> tuple[int, int]:
    """Return 1-indexed line and column of an offset."""
    line_no = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line_no, offset - line_start + 1


def context_window(text: str, start: int, end: int, window: int = DEFAULT_CONTEXT_WINDOW) -> str:
    """Return stripped text around a match."""
    return text[max(0, start - window) : min(len(text), end + window)].strip()


def locate(
    text: str,
    pattern: Pattern,
    window: int = DEFAULT_CONTEXT_WINDOW,
    compiled: re.Pattern[str] | None = None,
) -> Iterator[Finding]:
    """Yield one finding per non-overlapping match, left to right.

    Each call starts a fresh scan. re.finditer steps past empty matches,
    so patterns that can match the empty string still terminate.

    Raises:
        re.error: If the pattern expression is malformed.
    """
    expression = compiled if compiled is not None else pattern.compile()

    for match in expression.finditer(text):
        start, end = match.span()
        line_no, column = line_and_column(text, start)
        yield Finding(
            category=pattern.category,
            pattern_id=pattern.id,
            name=pattern.name,
            description=pattern.description,
            severity=pattern.severity,
            matched_text=match.group(0),
            location=Location(offset=start, end_offset=end, line=line_no, column=column),
            context=context_window(text, start, end, window),
        )
