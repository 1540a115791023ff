"""Scanner engine implementation.

Limitations:
- Regex matching only, no HTML or JavaScript parsing
- Overlapping indicators from different patterns are all reported
- Text must already be extracted from the source document
"""

from __future__ import annotations

import multiprocessing
from pathlib import Path
from time import perf_counter
from typing import Any

from loguru import logger

from models import DocumentMetadata, Finding
from pdfxss.content import extract_links, extract_script_snippets
from pdfxss.detectors import CATEGORY_DETECTORS
from pdfxss.documents import document_from_text, load_document
from pdfxss.options import ScanOptions
from pdfxss.registry import PatternRegistry, get_default_registry
from pdfxss.report import UNKNOWN_FILE_NAME, ScanReport, build_failure_report, build_report


class ScanTimeoutError(TimeoutError):
    """Raised when detectors do not finish within the scan timeout."""


class ContentTooLargeError(ValueError):
    """Raised when text exceeds the maximum scannable length."""


def _run_detectors(text: str, options: ScanOptions, registry: PatternRegistry) -> list[Finding]:
    """Run enabled detectors in worker processes and merge results in fixed order.

    Workers still running at the deadline are terminated, so a runaway
    expression never outlives the scan.
    """
    categories = [category for category in CATEGORY_DETECTORS if category in options.enabled_categories]
    if not categories:
        return []

    deadline = perf_counter() + options.scan_timeout
    with multiprocessing.get_context().Pool(processes=len(categories)) as pool:
        pending = [
            pool.apply_async(CATEGORY_DETECTORS[category], (text, options, registry))
            for category in categories
        ]
        findings: list[Finding] = []
        try:
            for result in pending:
                findings.extend(result.get(timeout=max(0.0, deadline - perf_counter())))
        except multiprocessing.TimeoutError as exc:
            raise ScanTimeoutError(f"Scan timed out after {options.scan_timeout:g} seconds") from exc
    # Leaving the pool context terminates every worker.
    return findings


def _embedded_content(text: str, page_count: int) -> dict[str, Any]:
    return {
        "links": [link.to_dict() for link in extract_links(text, page_count)],
        "scripts": [snippet.to_dict() for snippet in extract_script_snippets(text, page_count)],
    }


def scan_text(
    text: str,
    metadata: DocumentMetadata | None = None,
    options: ScanOptions | None = None,
    file_name: str = "buffer",
    registry: PatternRegistry | None = None,
    timestamp: str | None = None,
) -> ScanReport:
    """Scan extracted text and return a report.

    Never raises for scan-level problems: oversized content, timeouts and
    detector errors produce a failed report instead.
    """
    options = options or ScanOptions()
    registry = registry or get_default_registry()
    if metadata is None:
        metadata = document_from_text(text).metadata

    started_at = perf_counter()
    try:
        if len(text) > options.max_content_length:
            raise ContentTooLargeError(
                f"Content length {len(text)} exceeds maximum of {options.max_content_length}"
            )
        findings = _run_detectors(text, options, registry)
        embedded = _embedded_content(text, metadata.page_count) if options.include_embedded else None
    except (ScanTimeoutError, ContentTooLargeError) as exc:
        logger.warning(f"Scan of {file_name} failed: {exc}")
        return build_failure_report(exc, file_name=file_name, timestamp=timestamp)
    except Exception as exc:
        logger.exception(f"Unexpected error while scanning {file_name}")
        return build_failure_report(exc, file_name=file_name, timestamp=timestamp)

    duration_ms = int((perf_counter() - started_at) * 1000)
    logger.debug(f"Scanned {file_name}: {len(findings)} finding(s) in {duration_ms} ms")

    return build_report(
        findings,
        metadata,
        options,
        file_name=file_name,
        timestamp=timestamp,
        raw_content=text,
        embedded_content=embedded,
    )


def scan_file(
    path: str | Path,
    options: ScanOptions | None = None,
    registry: PatternRegistry | None = None,
) -> ScanReport:
    """Load an extracted text file and scan it.

    Input errors become a failed report.
    """
    file_path = Path(path)
    file_name = file_path.name or UNKNOWN_FILE_NAME
    try:
        document = load_document(file_path)
    except (OSError, ValueError) as exc:
        logger.warning(f"Cannot read {file_path}: {exc}")
        return build_failure_report(exc, file_name=file_name)

    return scan_text(
        document.text,
        document.metadata,
        options,
        file_name=file_name,
        registry=registry,
    )
