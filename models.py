"""Data models for patterns, findings and document metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Literal

Category = Literal["content-xss", "js-injection", "form-injection"]
SeverityLevel = Literal["low", "medium", "high", "critical"]
RiskLevel = Literal["none", "low", "medium", "high", "critical"]

CATEGORIES: tuple[Category, ...] = ("content-xss", "js-injection", "form-injection")
SEVERITY_RANK: dict[str, int] = {
    "low": 1,
    "medium": 2,
    "high": 3,
    "critical": 4,
}


def severity_rank(severity: str) -> int:
    """Return numeric rank of a severity name, 0 when unknown."""
    return SEVERITY_RANK.get(severity, 0)


def truncate_text(text: str, max_length: int = 100) -> str:
    """Shorten text to max_length characters, ending in '...' when cut."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max(0, max_length - 3)] + "..."


@lru_cache(maxsize=None)
def _compile(regex: str, flags: int) -> re.Pattern[str]:
    return re.compile(regex, flags)


@dataclass(frozen=True)
class Pattern:
    """Named detection rule."""

    id: str
    category: Category
    name: str
    regex: str
    severity: SeverityLevel
    description: str
    min_sensitivity: int = 1
    ignore_case: bool = True
    multiline: bool = False

    @property
    def flags(self) -> int:
        """Return re flags for this pattern."""
        flags = 0
        if self.ignore_case:
            flags |= re.IGNORECASE
        if self.multiline:
            flags |= re.MULTILINE
        return flags

    def compile(self) -> re.Pattern[str]:
        """Return the compiled expression.

        Raises:
            re.error: If the expression is malformed.
        """
        return _compile(self.regex, self.flags)


@dataclass(frozen=True)
class Location:
    """Position of a match in the scanned text."""

    offset: int
    end_offset: int
    line: int
    column: int

    def to_dict(self) -> dict[str, int]:
        """Serialize location to dictionary output."""
        return {
            "offset": self.offset,
            "endOffset": self.end_offset,
            "line": self.line,
            "column": self.column,
        }


@dataclass(frozen=True)
class Finding:
    """One matched occurrence of a pattern."""

    category: Category
    pattern_id: str
    name: str
    description: str
    severity: SeverityLevel
    matched_text: str
    location: Location
    context: str

    @property
    def rank(self) -> int:
        """Return numeric severity rank."""
        return severity_rank(self.severity)

    def truncated(self, max_length: int) -> Finding:
        """Return a copy whose matched text is shortened for display."""
        return replace(self, matched_text=truncate_text(self.matched_text, max_length))

    def to_dict(self) -> dict[str, object]:
        """Serialize finding to dictionary output."""
        return {
            "type": self.category,
            "patternId": self.pattern_id,
            "name": self.name,
            "description": self.description,
            "severity": self.severity,
            "matchedText": self.matched_text,
            "location": self.location.to_dict(),
            "context": self.context,
        }


@dataclass(frozen=True)
class DocumentMetadata:
    """Metadata of an already-extracted document."""

    page_count: int
    content_length: int
    document_info: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        """Serialize metadata to dictionary output."""
        return {
            "pageCount": self.page_count,
            "contentLength": self.content_length,
            "documentInfo": dict(self.document_info),
        }
