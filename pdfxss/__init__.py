"""Pattern-based XSS and script-injection scanner for extracted document text."""

from pdfxss.engine import scan_file, scan_text
from pdfxss.options import ScanOptions
from pdfxss.report import ScanReport

__all__ = ["ScanOptions", "ScanReport", "scan_file", "scan_text"]
