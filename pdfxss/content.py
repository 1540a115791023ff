"""Inventory of links and script-like snippets in extracted text.

Regex based only; no document structure is parsed. One malformed item
is logged and skipped without dropping the rest.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from loguru import logger

URL_RE = re.compile(r"(https?://[^\s]+)|(www\.[^\s]+)|((javascript|data):[^\s]+)", re.IGNORECASE)
SCRIPT_INDICATOR_RES = (
    re.compile(r"function\s*\([^)]*\)\s*{[^}]*}", re.IGNORECASE),
    re.compile(r"var\s+[a-zA-Z0-9_$]+\s*=", re.IGNORECASE),
    re.compile(r"let\s+[a-zA-Z0-9_$]+\s*=", re.IGNORECASE),
    re.compile(r"const\s+[a-zA-Z0-9_$]+\s*=", re.IGNORECASE),
    re.compile(r"new\s+[a-zA-Z0-9_$]+\(", re.IGNORECASE),
    re.compile(r"return\s+[a-zA-Z0-9_$]+", re.IGNORECASE),
    re.compile(r"document\.get", re.IGNORECASE),
    re.compile(r"document\.write", re.IGNORECASE),
    re.compile(r"window\.", re.IGNORECASE),
)
SNIPPET_BEFORE = 50
SNIPPET_AFTER = 100


@dataclass(frozen=True)
class ExtractedLink:
    """URL found in text."""

    url: str
    scheme: str
    host: str
    port: int | None
    offset: int
    page: int
    risk: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialize link to dictionary output."""
        return {
            "url": self.url,
            "scheme": self.scheme,
            "host": self.host,
            "port": self.port,
            "offset": self.offset,
            "pageNum": self.page,
            "risk": self.risk,
        }


@dataclass(frozen=True)
class ScriptSnippet:
    """Script-like text with surrounding context."""

    content: str
    offset: int
    page: int

    def to_dict(self) -> dict[str, object]:
        """Serialize snippet to dictionary output."""
        return {"content": self.content, "offset": self.offset, "pageNum": self.page}


def estimate_page_number(offset: int, text_length: int, page_count: int) -> int:
    """Estimate the page of an offset assuming evenly spread text."""
    if text_length <= 0 or page_count <= 1:
        return 1
    estimated = math.ceil(offset / text_length * page_count)
    return min(max(estimated, 1), page_count)


def _classify_link(url: str) -> str | None:
    lowered = url.lower()
    if lowered.startswith("javascript:"):
        return "javascript-protocol"
    if lowered.startswith("data:text/html") or "base64" in lowered:
        return "data-uri"
    return None


def _make_link(url: str, offset: int, text_length: int, page_count: int) -> ExtractedLink:
    """Build a link entry.

    Raises:
        ValueError: If the URL cannot be split into components.
    """
    target = f"http://{url}" if url.lower().startswith("www.") else url
    parts = urlsplit(target)
    return ExtractedLink(
        url=url,
        scheme=parts.scheme.lower(),
        host=parts.hostname or "",
        port=parts.port,
        offset=offset,
        page=estimate_page_number(offset, text_length, page_count),
        risk=_classify_link(url),
    )


def extract_links(text: str, page_count: int = 1) -> list[ExtractedLink]:
    """Collect URLs from text in order of appearance."""
    links: list[ExtractedLink] = []
    for match in URL_RE.finditer(text):
        try:
            links.append(_make_link(match.group(0), match.start(), len(text), page_count))
        except ValueError as exc:
            logger.warning(f"Skipping malformed link at offset {match.start()}: {exc}")
    return links


def extract_script_snippets(text: str, page_count: int = 1) -> list[ScriptSnippet]:
    """Collect script-like snippets, indicator by indicator."""
    snippets: list[ScriptSnippet] = []
    for indicator in SCRIPT_INDICATOR_RES:
        for match in indicator.finditer(text):
            start = max(0, match.start() - SNIPPET_BEFORE)
            end = min(len(text), match.end() + SNIPPET_AFTER)
            snippets.append(
                ScriptSnippet(
                    content=text[start:end],
                    offset=match.start(),
                    page=estimate_page_number(match.start(), len(text), page_count),
                )
            )
    return snippets
