"""Read-only registry of detection patterns."""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache

from loguru import logger

from models import CATEGORIES, SEVERITY_RANK, Category, Pattern
from pdfxss.options import MAX_SENSITIVITY_LEVEL, MIN_SENSITIVITY_LEVEL
from pdfxss.patterns import DEFAULT_PATTERNS


class PatternRegistry:
    """Patterns grouped by category, in registration order.

    Built once; never mutated afterwards, so one instance can be shared
    by concurrent scans.

    Args:
        patterns: Pattern definitions to register.
        validate: Compile every expression up front and drop the ones
            that fail, logging a warning for each.

    Raises:
        ValueError: On duplicate pattern ids, unknown categories or
            severities, or a sensitivity gate outside 1-5.
    """

    def __init__(self, patterns: Iterable[Pattern], validate: bool = True) -> None:
        grouped: dict[Category, list[Pattern]] = {category: [] for category in CATEGORIES}
        seen_ids: set[str] = set()

        for pattern in patterns:
            if pattern.id in seen_ids:
                raise ValueError(f"Duplicate pattern id: {pattern.id}")
            if pattern.category not in grouped:
                raise ValueError(f"Unknown category for {pattern.id}: {pattern.category}")
            if pattern.severity not in SEVERITY_RANK:
                raise ValueError(f"Unknown severity for {pattern.id}: {pattern.severity}")
            if not MIN_SENSITIVITY_LEVEL <= pattern.min_sensitivity <= MAX_SENSITIVITY_LEVEL:
                raise ValueError(
                    f"Sensitivity gate for {pattern.id} out of range: {pattern.min_sensitivity}"
                )
            seen_ids.add(pattern.id)

            if validate:
                try:
                    pattern.compile()
                except re.error as exc:
                    logger.warning(f"Dropping pattern with invalid expression: {pattern.id} ({exc})")
                    continue

            grouped[pattern.category].append(pattern)

        self._patterns: dict[Category, tuple[Pattern, ...]] = {
            category: tuple(items) for category, items in grouped.items()
        }

    def patterns_for(self, category: Category) -> tuple[Pattern, ...]:
        """Return patterns of one category in registration order."""
        return self._patterns.get(category, ())

    def all_patterns(self) -> tuple[Pattern, ...]:
        """Return every pattern, category by category."""
        return tuple(pattern for category in CATEGORIES for pattern in self._patterns[category])

    def get(self, pattern_id: str) -> Pattern | None:
        """Return the pattern with the given id, if registered."""
        for pattern in self.all_patterns():
            if pattern.id == pattern_id:
                return pattern
        return None

    def __len__(self) -> int:
        return sum(len(items) for items in self._patterns.values())


@lru_cache(maxsize=1)
def get_default_registry() -> PatternRegistry:
    """Return the shared registry built from the bundled pattern table."""
    return PatternRegistry(DEFAULT_PATTERNS)
