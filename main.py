"""CLI entry point for the document XSS scanner."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from models import CATEGORIES, SEVERITY_RANK
from pdfxss.engine import scan_file
from pdfxss.options import (
    DEFAULT_SCAN_TIMEOUT,
    DEFAULT_SENSITIVITY_LEVEL,
    DEFAULT_SEVERITY_THRESHOLD,
    MAX_SENSITIVITY_LEVEL,
    MIN_SENSITIVITY_LEVEL,
    ScanOptions,
)

TYPE_LABELS = {
    "content-xss": "XSS Pattern",
    "js-injection": "JavaScript Injection",
    "form-injection": "Form Injection",
}


def build_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Check extracted document text for XSS and script injection"
    )
    parser.add_argument("--path", required=True, help="Extracted text file to scan")
    parser.add_argument(
        "--threshold",
        choices=tuple(SEVERITY_RANK),
        default=DEFAULT_SEVERITY_THRESHOLD,
        help=f"Minimum severity to report (default: {DEFAULT_SEVERITY_THRESHOLD})",
    )
    parser.add_argument(
        "--sensitivity",
        type=int,
        choices=range(MIN_SENSITIVITY_LEVEL, MAX_SENSITIVITY_LEVEL + 1),
        default=DEFAULT_SENSITIVITY_LEVEL,
        help=f"Pattern sensitivity 1-5 (default: {DEFAULT_SENSITIVITY_LEVEL})",
    )
    parser.add_argument(
        "--categories",
        nargs="+",
        choices=CATEGORIES,
        default=list(CATEGORIES),
        help="Detector categories to run (default: all)",
    )
    parser.add_argument(
        "--format",
        choices=("json", "table"),
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--output",
        help="Optional file path to write JSON report (overwrites existing file)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_SCAN_TIMEOUT,
        help=f"Scan timeout in seconds (default: {DEFAULT_SCAN_TIMEOUT:g})",
    )
    parser.add_argument(
        "--full-details",
        action="store_true",
        help="Include matched text and context for every finding",
    )
    parser.add_argument(
        "--include-content",
        action="store_true",
        help="Include raw content in the report (may be large)",
    )
    parser.add_argument(
        "--include-grouped",
        action="store_true",
        help="Include findings grouped by type and severity",
    )
    parser.add_argument(
        "--include-embedded",
        action="store_true",
        help="Include links and script snippets found in the text",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose debug output",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    """Configure loguru output for CLI messages."""
    logger.remove()
    logger.add(
        sys.stdout,
        level="DEBUG" if verbose else "INFO",
        format="{message}",
        filter=lambda record: record["level"].name in {"INFO", "DEBUG"},
    )
    logger.add(sys.stderr, level="WARNING", format="{message}")


def options_from_args(args: argparse.Namespace) -> ScanOptions:
    """Translate parsed CLI flags into scan options."""
    return ScanOptions(
        severity_threshold=args.threshold,
        sensitivity_level=args.sensitivity,
        enabled_categories=frozenset(args.categories),
        scan_timeout=args.timeout,
        include_raw_content=args.include_content,
        include_full_details=args.full_details,
        include_grouped=args.include_grouped,
        include_embedded=args.include_embedded,
    )


def format_json_output(report: dict[str, Any]) -> str:
    """Render report as pretty JSON."""
    return json.dumps(report, indent=2)


def _build_aligned_table(rows: list[list[str]]) -> list[str]:
    """Return table rows with simple aligned columns."""
    if not rows:
        return []

    column_widths = [0] * len(rows[0])
    for row in rows:
        for index, value in enumerate(row):
            column_widths[index] = max(column_widths[index], len(value))

    return [
        " | ".join(value.ljust(column_widths[index]) for index, value in enumerate(row))
        for row in rows
    ]


def format_table_output(report: dict[str, Any]) -> str:
    """Render report as a human-readable table."""
    summary = report.get("summary", {})

    table_rows: list[list[str]] = [
        ["TYPE", "NAME", "SEVERITY", "LINE", "COLUMN"],
    ]
    for vulnerability in report.get("vulnerabilities", []):
        location = vulnerability.get("location", {})
        table_rows.append(
            [
                TYPE_LABELS.get(vulnerability.get("type", ""), str(vulnerability.get("type", ""))),
                str(vulnerability.get("name", "")),
                str(vulnerability.get("severity", "")).upper(),
                str(location.get("line", "")),
                str(location.get("column", "")),
            ]
        )

    severity_counts = summary.get("severityCounts", {})
    lines = [
        "=== Scan Summary ===",
        f"File: {summary.get('fileName', '')}",
        f"Pages: {summary.get('pageCount', 0)}",
        f"Findings: {summary.get('vulnerabilityCount', 0)}",
        f"Risk level: {summary.get('riskLevel', 'none')}",
        f"Risk score: {summary.get('riskScore', 0)}",
        f"Safe to use: {'yes' if summary.get('safeToUse') else 'no'}",
    ]
    if severity_counts:
        lines.append(
            "By severity: "
            + ", ".join(f"{severity}={count}" for severity, count in severity_counts.items())
        )
    lines += ["", "=== Findings ===", *_build_aligned_table(table_rows)]

    return "\n".join(lines)


def write_output_file(output_path: str, content: str) -> None:
    """Write rendered content to an output file, overwriting if it exists."""
    Path(output_path).write_text(f"{content}\n", encoding="utf-8")


def main() -> int:
    """Run the scanner CLI."""
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(verbose=args.verbose)

    target_path = Path(args.path)
    if not target_path.exists():
        logger.error(f"Error: file not found: {target_path}")
        return 1
    if not target_path.is_file():
        logger.error(f"Error: path is not a file: {target_path}")
        return 1

    try:
        options = options_from_args(args)
    except ValueError as exc:
        logger.error(f"Error: invalid options: {exc}")
        return 1

    if args.verbose:
        logger.debug(f"[DEBUG] Starting scan for: {target_path}")

    report = scan_file(target_path, options).to_dict()
    if not report["success"]:
        logger.error(f"Error: scan failed: {report['error']}")
        return 1

    if args.format == "json":
        rendered_output = format_json_output(report)
    else:
        rendered_output = format_table_output(report)

    logger.info(rendered_output)

    if args.output:
        try:
            write_output_file(args.output, format_json_output(report))
        except OSError as exc:
            logger.error(f"Error: failed to write output file '{args.output}': {exc}")
            return 1
        if args.verbose:
            logger.debug(f"[DEBUG] Wrote output to: {args.output}")

    return 0 if report["summary"]["safeToUse"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
