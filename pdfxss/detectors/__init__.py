"""Pattern detectors."""

from pdfxss.detectors.categories import (
    CATEGORY_DETECTORS,
    detect_form_injection,
    detect_js_injection,
    detect_xss,
)
from pdfxss.detectors.locator import locate

__all__ = [
    "CATEGORY_DETECTORS",
    "detect_form_injection",
    "detect_js_injection",
    "detect_xss",
    "locate",
]
