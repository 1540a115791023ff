"""Tests for risk aggregation."""

from models import Finding, Location
from pdfxss.aggregate import (
    aggregate,
    calculate_risk_level,
    calculate_risk_score,
    risk_level_from_score,
)


def _finding(severity: str, category: str = "content-xss") -> Finding:
    """Build a finding with the given severity."""
    return Finding(
        category=category,  # type: ignore[arg-type]
        pattern_id="test",
        name="Test",
        description="Test finding",
        severity=severity,  # type: ignore[arg-type]
        matched_text="x",
        location=Location(offset=0, end_offset=1, line=1, column=1),
        context="x",
    )


def test_empty_findings_have_no_risk() -> None:
    """Verify no findings yields none and empty histograms."""
    summary = aggregate([])

    assert summary.risk_level == "none"
    assert summary.severity_counts == {}
    assert summary.type_counts == {}
    assert summary.risk_score == 0
    assert summary.risk_score_level == "none"


def test_single_critical_dominates_many_low() -> None:
    """Verify one critical finding sets the level regardless of count."""
    findings = [_finding("low") for _ in range(20)] + [_finding("critical")]

    assert calculate_risk_level(findings) == "critical"


def test_only_low_findings_yield_low() -> None:
    """Verify low-only findings stay low."""
    assert calculate_risk_level([_finding("low"), _finding("low")]) == "low"


def test_high_beats_medium() -> None:
    """Verify worst severity wins."""
    assert calculate_risk_level([_finding("medium"), _finding("high")]) == "high"
    assert calculate_risk_level([_finding("medium")]) == "medium"


def test_counts_omit_missing_keys_and_keep_first_seen_order() -> None:
    """Verify histograms count only present severities and categories."""
    findings = [
        _finding("high", "js-injection"),
        _finding("medium", "content-xss"),
        _finding("high", "js-injection"),
    ]

    summary = aggregate(findings)

    assert summary.severity_counts == {"high": 2, "medium": 1}
    assert list(summary.severity_counts) == ["high", "medium"]
    assert summary.type_counts == {"js-injection": 2, "content-xss": 1}


def test_weighted_score_can_disagree_with_worst_case_level() -> None:
    """Verify many medium findings raise the score band above the level."""
    findings = [_finding("medium") for _ in range(5)]

    summary = aggregate(findings)

    assert summary.risk_level == "medium"
    assert summary.risk_score == 50
    assert summary.risk_score_level == "high"


def test_weighted_score_is_capped() -> None:
    """Verify the score never exceeds 100."""
    assert calculate_risk_score([_finding("high") for _ in range(10)]) == 100


def test_score_bands() -> None:
    """Verify score-to-band boundaries."""
    assert risk_level_from_score(0) == "none"
    assert risk_level_from_score(3) == "low"
    assert risk_level_from_score(25) == "medium"
    assert risk_level_from_score(50) == "high"
    assert risk_level_from_score(75) == "critical"
