"""Category detectors for XSS, JavaScript injection and form injection."""

from __future__ import annotations

import re
from collections.abc import Callable

from loguru import logger

from models import Category, Finding
from pdfxss.detectors.locator import locate
from pdfxss.options import ScanOptions
from pdfxss.registry import PatternRegistry, get_default_registry
from pdfxss.threshold import admitted_patterns

Detector = Callable[..., list[Finding]]


def _detect_category(
    category: Category,
    text: str,
    options: ScanOptions | None,
    registry: PatternRegistry | None,
) -> list[Finding]:
    """Run every admitted pattern of one category over text."""
    options = options or ScanOptions()
    registry = registry or get_default_registry()

    findings: list[Finding] = []
    for pattern in admitted_patterns(registry.patterns_for(category), options):
        try:
            compiled = pattern.compile()
        except re.error as exc:
            logger.warning(f"Skipping pattern with invalid expression: {pattern.id} ({exc})")
            continue
        findings.extend(locate(text, pattern, window=options.context_window, compiled=compiled))

    logger.debug(f"{category}: {len(findings)} finding(s)")
    return findings


def detect_xss(
    text: str,
    options: ScanOptions | None = None,
    registry: PatternRegistry | None = None,
) -> list[Finding]:
    """Detect script tags, event handlers and other XSS indicators."""
    return _detect_category("content-xss", text, options, registry)


def detect_js_injection(
    text: str,
    options: ScanOptions | None = None,
    registry: PatternRegistry | None = None,
) -> list[Finding]:
    """Detect Acrobat API calls and process or shell access."""
    return _detect_category("js-injection", text, options, registry)


def detect_form_injection(
    text: str,
    options: ScanOptions | None = None,
    registry: PatternRegistry | None = None,
) -> list[Finding]:
    """Detect HTML forms, submit calls and PDF form structures."""
    return _detect_category("form-injection", text, options, registry)


# Merge order of detector results.
CATEGORY_DETECTORS: dict[Category, Detector] = {
    "content-xss": detect_xss,
    "js-injection": detect_js_injection,
    "form-injection": detect_form_injection,
}
