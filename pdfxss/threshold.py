"""Severity and sensitivity gating of patterns."""

from collections.abc import Iterable

from models import Pattern, severity_rank
from pdfxss.options import ScanOptions


def meets_threshold(severity: str, threshold: str) -> bool:
    """Return True when severity is at or above threshold."""
    return severity_rank(severity) >= severity_rank(threshold)


def admit(pattern: Pattern, options: ScanOptions) -> bool:
    """Return True when a pattern should run under the given options.

    Both the severity threshold and the sensitivity gate must pass.
    """
    return (
        meets_threshold(pattern.severity, options.severity_threshold)
        and pattern.min_sensitivity <= options.sensitivity_level
    )


def admitted_patterns(patterns: Iterable[Pattern], options: ScanOptions) -> list[Pattern]:
    """Return the admitted subset, keeping input order."""
    return [pattern for pattern in patterns if admit(pattern, options)]
