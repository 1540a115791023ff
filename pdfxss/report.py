"""Report building from findings and document metadata."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from models import DocumentMetadata, Finding
from pdfxss.aggregate import RiskSummary, aggregate
from pdfxss.options import ScanOptions

UNKNOWN_FILE_NAME = "unknown"
UNKNOWN_ERROR = "Unknown error"


def utc_timestamp() -> str:
    """Return current UTC time in ISO 8601 with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def simplify_finding(finding: Finding) -> dict[str, Any]:
    """Project a finding to type, name, severity and position."""
    return {
        "type": finding.category,
        "name": finding.name,
        "severity": finding.severity,
        "location": {
            "line": finding.location.line,
            "column": finding.location.column,
        },
    }


def project_findings(findings: Sequence[Finding], options: ScanOptions) -> list[dict[str, Any]]:
    """Return full or simplified finding dictionaries per options."""
    if options.include_full_details:
        return [finding.truncated(options.max_match_length).to_dict() for finding in findings]
    return [simplify_finding(finding) for finding in findings]


def group_findings(vulnerabilities: Sequence[dict[str, Any]]) -> dict[str, dict[str, list[dict[str, Any]]]]:
    """Partition projected findings by type and by severity."""
    by_type: dict[str, list[dict[str, Any]]] = {}
    by_severity: dict[str, list[dict[str, Any]]] = {}
    for vulnerability in vulnerabilities:
        by_type.setdefault(vulnerability["type"], []).append(vulnerability)
        by_severity.setdefault(vulnerability["severity"], []).append(vulnerability)
    return {"byType": by_type, "bySeverity": by_severity}


@dataclass(frozen=True)
class ScanReport:
    """Result of one scan, successful or failed."""

    success: bool
    file_name: str
    timestamp: str
    error: str | None = None
    metadata: DocumentMetadata | None = None
    findings: tuple[Finding, ...] = ()
    risk: RiskSummary | None = None
    vulnerabilities: tuple[dict[str, Any], ...] = ()
    grouped: dict[str, Any] | None = None
    embedded_content: dict[str, Any] | None = None
    raw_content: str | None = None

    def __post_init__(self) -> None:
        """Require metadata and risk summary on successful reports."""
        if self.success and (self.metadata is None or self.risk is None):
            raise ValueError("A successful report needs metadata and a risk summary")

    @property
    def safe_to_use(self) -> bool:
        """Return True only for a successful scan without findings."""
        return self.success and len(self.findings) == 0

    @property
    def risk_level(self) -> str:
        """Return the canonical worst-case risk level."""
        return self.risk.risk_level if self.risk else "none"

    def to_dict(self) -> dict[str, Any]:
        """Serialize report to dictionary output."""
        if not self.success:
            return {
                "success": False,
                "error": self.error,
                "fileName": self.file_name,
                "timestamp": self.timestamp,
                "vulnerabilities": [],
                "safeToUse": False,
            }

        report: dict[str, Any] = {
            "success": True,
            "summary": {
                "fileName": self.file_name,
                "timestamp": self.timestamp,
                "pageCount": self.metadata.page_count,
                "vulnerabilityCount": len(self.findings),
                "riskLevel": self.risk.risk_level,
                "riskScore": self.risk.risk_score,
                "riskScoreLevel": self.risk.risk_score_level,
                "safeToUse": self.safe_to_use,
                "severityCounts": dict(self.risk.severity_counts),
                "typeCounts": dict(self.risk.type_counts),
            },
            "metadata": self.metadata.to_dict(),
            "vulnerabilities": list(self.vulnerabilities),
        }
        if self.grouped is not None:
            report["groupedVulnerabilities"] = self.grouped
        if self.embedded_content is not None:
            report["embeddedContent"] = self.embedded_content
        if self.raw_content is not None:
            report["rawContent"] = self.raw_content
        return report


def build_report(
    findings: Sequence[Finding],
    metadata: DocumentMetadata,
    options: ScanOptions | None = None,
    file_name: str = UNKNOWN_FILE_NAME,
    timestamp: str | None = None,
    raw_content: str | None = None,
    embedded_content: dict[str, Any] | None = None,
) -> ScanReport:
    """Build a successful report.

    Args:
        findings: Findings in reporting order.
        metadata: Metadata of the scanned document.
        options: Report-shaping options.
        file_name: Name shown in the summary.
        timestamp: Fixed timestamp; current UTC time when omitted.
        raw_content: Source text, attached only when the options ask for it.
        embedded_content: Link and script inventory, attached only when the
            options ask for it.
    """
    options = options or ScanOptions()
    ordered = list(findings)
    if options.sort_by_severity:
        ordered.sort(key=lambda finding: finding.rank, reverse=True)

    vulnerabilities = project_findings(ordered, options)
    return ScanReport(
        success=True,
        file_name=file_name,
        timestamp=timestamp or utc_timestamp(),
        metadata=metadata,
        findings=tuple(ordered),
        risk=aggregate(ordered),
        vulnerabilities=tuple(vulnerabilities),
        grouped=group_findings(vulnerabilities) if options.include_grouped else None,
        embedded_content=embedded_content if options.include_embedded else None,
        raw_content=raw_content if options.include_raw_content else None,
    )


def _error_message(error: str | BaseException) -> str:
    if isinstance(error, str):
        return error or UNKNOWN_ERROR
    return str(error) or type(error).__name__


def build_failure_report(
    error: str | BaseException,
    file_name: str = UNKNOWN_FILE_NAME,
    timestamp: str | None = None,
) -> ScanReport:
    """Build a failed report carrying only the error message."""
    return ScanReport(
        success=False,
        file_name=file_name,
        timestamp=timestamp or utc_timestamp(),
        error=_error_message(error),
    )
