"""Scan configuration and defaults."""

from __future__ import annotations

from dataclasses import dataclass

from models import CATEGORIES, SEVERITY_RANK, Category, SeverityLevel

DEFAULT_SEVERITY_THRESHOLD: SeverityLevel = "medium"
# 1 (basic) to 5 (paranoid)
DEFAULT_SENSITIVITY_LEVEL = 3
DEFAULT_MAX_CONTENT_LENGTH = 10 * 1024 * 1024
DEFAULT_SCAN_TIMEOUT = 60.0
DEFAULT_MAX_MATCH_LENGTH = 200
DEFAULT_CONTEXT_WINDOW = 20

MIN_SENSITIVITY_LEVEL = 1
MAX_SENSITIVITY_LEVEL = 5


@dataclass(frozen=True)
class ScanOptions:
    """Options for a single scan call."""

    severity_threshold: SeverityLevel = DEFAULT_SEVERITY_THRESHOLD
    sensitivity_level: int = DEFAULT_SENSITIVITY_LEVEL
    enabled_categories: frozenset[Category] = frozenset(CATEGORIES)
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH
    scan_timeout: float = DEFAULT_SCAN_TIMEOUT
    context_window: int = DEFAULT_CONTEXT_WINDOW

    include_raw_content: bool = False
    include_full_details: bool = False
    include_grouped: bool = False
    include_embedded: bool = False
    max_match_length: int = DEFAULT_MAX_MATCH_LENGTH
    sort_by_severity: bool = False

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.severity_threshold not in SEVERITY_RANK:
            raise ValueError(f"Unknown severity threshold: {self.severity_threshold!r}")
        if not MIN_SENSITIVITY_LEVEL <= self.sensitivity_level <= MAX_SENSITIVITY_LEVEL:
            raise ValueError(
                f"Sensitivity level must be {MIN_SENSITIVITY_LEVEL}-{MAX_SENSITIVITY_LEVEL}, "
                f"got {self.sensitivity_level}"
            )
        unknown = set(self.enabled_categories) - set(CATEGORIES)
        if unknown:
            raise ValueError(f"Unknown categories: {', '.join(sorted(unknown))}")
        if self.max_content_length <= 0:
            raise ValueError("max_content_length must be positive")
        if self.scan_timeout <= 0:
            raise ValueError("scan_timeout must be positive")
        if self.context_window < 0:
            raise ValueError("context_window must not be negative")
        # Accept any iterable of categories from callers.
        object.__setattr__(self, "enabled_categories", frozenset(self.enabled_categories))
