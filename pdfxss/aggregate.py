"""Risk aggregation over a finding list.

Two independent policies are exposed:

- ``calculate_risk_level``: worst severity present wins. This is the
  canonical ``riskLevel`` of a report.
- ``calculate_risk_score``: weighted 0-100 score, mapped to a band by
  ``risk_level_from_score`` and reported as ``riskScoreLevel``.

They can disagree, e.g. five medium findings score 50 (band "high")
while the worst-case level stays "medium".
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from models import Finding, RiskLevel

SCORE_WEIGHTS: dict[str, int] = {
    "critical": 25,
    "high": 25,
    "medium": 10,
    "low": 3,
}
MAX_RISK_SCORE = 100


@dataclass(frozen=True)
class RiskSummary:
    """Aggregated statistics of one scan."""

    severity_counts: dict[str, int]
    type_counts: dict[str, int]
    risk_level: RiskLevel
    risk_score: int
    risk_score_level: RiskLevel


def count_severities(findings: Sequence[Finding]) -> dict[str, int]:
    """Count findings per severity, in order of first occurrence."""
    counts: dict[str, int] = {}
    for finding in findings:
        counts[finding.severity] = counts.get(finding.severity, 0) + 1
    return counts


def count_types(findings: Sequence[Finding]) -> dict[str, int]:
    """Count findings per category, in order of first occurrence."""
    counts: dict[str, int] = {}
    for finding in findings:
        counts[finding.category] = counts.get(finding.category, 0) + 1
    return counts


def calculate_risk_level(findings: Sequence[Finding]) -> RiskLevel:
    """Return the worst severity present, or "none" without findings."""
    if not findings:
        return "none"

    severities = {finding.severity for finding in findings}
    if "critical" in severities:
        return "critical"
    if "high" in severities:
        return "high"
    if "medium" in severities:
        return "medium"
    return "low"


def calculate_risk_score(findings: Sequence[Finding]) -> int:
    """Return the weighted risk score, capped at 100."""
    score = sum(SCORE_WEIGHTS.get(finding.severity, 0) for finding in findings)
    return min(MAX_RISK_SCORE, score)


def risk_level_from_score(score: int) -> RiskLevel:
    """Map a weighted risk score to its band."""
    if score >= 75:
        return "critical"
    if score >= 50:
        return "high"
    if score >= 25:
        return "medium"
    if score > 0:
        return "low"
    return "none"


def aggregate(findings: Sequence[Finding]) -> RiskSummary:
    """Compute histograms and both risk verdicts."""
    score = calculate_risk_score(findings)
    return RiskSummary(
        severity_counts=count_severities(findings),
        type_counts=count_types(findings),
        risk_level=calculate_risk_level(findings),
        risk_score=score,
        risk_score_level=risk_level_from_score(score),
    )
