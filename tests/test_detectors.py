"""Tests for category detectors and the match locator."""

from models import Pattern
from pdfxss.detectors import detect_form_injection, detect_js_injection, detect_xss, locate
from pdfxss.options import ScanOptions
from pdfxss.registry import PatternRegistry


def _names(findings: list) -> list[str]:
    """Return finding names in order."""
    return [finding.name for finding in findings]


def test_detects_script_tag() -> None:
    """Verify a script tag is reported as a high severity finding first."""
    findings = detect_xss('This content has <script>alert("XSS")</script> embedded in it')

    assert findings
    assert findings[0].name == "Script Tag"
    assert findings[0].severity == "high"
    assert findings[0].category == "content-xss"


def test_detects_javascript_protocol() -> None:
    """Verify javascript: URLs are reported."""
    findings = detect_xss('This link is malicious: <a href="javascript:alert(1)">Click me</a>')

    assert findings[0].name == "JavaScript Protocol"


def test_event_handler_respects_threshold() -> None:
    """Verify the medium event-handler rule is dropped at a high threshold."""
    content = '<div onclick="alert(1)">Click me</div>'

    low_findings = detect_xss(content, ScanOptions(severity_threshold="low"))
    high_findings = detect_xss(content, ScanOptions(severity_threshold="high"))

    assert "Event Handler" in _names(low_findings)
    assert high_findings == []


def test_detects_acrobat_api_calls() -> None:
    """Verify Acrobat API calls are reported by the JS injection detector."""
    findings = detect_js_injection('app.alert("This is an alert");')

    assert findings[0].name == "Acrobat API Call"
    assert all(finding.category == "js-injection" for finding in findings)


def test_detects_critical_menu_execution() -> None:
    """Verify execMenuItem is reported as critical."""
    findings = detect_js_injection('app.execMenuItem("MenuItem");')

    menu_items = [finding for finding in findings if finding.name == "Execute Menu Item"]
    assert len(menu_items) == 1
    assert menu_items[0].severity == "critical"


def test_findings_include_trimmed_context() -> None:
    """Verify context surrounds the match and is stripped."""
    content = 'Some text before\napp.alert("This is an alert");\nSome text after'
    findings = detect_js_injection(content)

    assert "app.alert" in findings[0].context
    assert findings[0].context == findings[0].context.strip()
    assert findings[0].location.line == 2
    assert findings[0].location.column == 1


def test_detects_html_form_and_submission() -> None:
    """Verify form markup and submit calls are reported."""
    form_findings = detect_form_injection(
        '<form action="https://example.com/submit">Form fields</form>'
    )
    submit_findings = detect_form_injection("form.submit();")

    assert form_findings[0].name == "HTML Form"
    assert submit_findings[0].name == "Form Submission"


def test_detects_pdf_form_structures_at_low_threshold() -> None:
    """Verify low severity AcroForm rule only runs at a low threshold."""
    content = "/AcroForm << /Fields [] >>"

    assert detect_form_injection(content) == []
    findings = detect_form_injection(content, ScanOptions(severity_threshold="low"))
    assert _names(findings) == ["AcroForm Structure"]


def test_matched_text_is_not_truncated_for_analysis() -> None:
    """Verify detectors keep the full matched text."""
    long_form = "<form>" + "x" * 100 + "</form>"
    findings = detect_form_injection(long_form)

    assert findings[0].matched_text == long_form
    assert findings[0].truncated(50).matched_text.endswith("...")
    assert len(findings[0].truncated(50).matched_text) == 50
    assert findings[0].truncated(50).location == findings[0].location


def test_location_of_script_tag_on_second_line() -> None:
    """Verify line and column are computed from the preceding newline."""
    text = "abc\ndef<script>x</script>"
    findings = [finding for finding in detect_xss(text) if finding.name == "Script Tag"]

    assert len(findings) == 1
    assert findings[0].location.line == 2
    assert findings[0].location.column == 4
    assert findings[0].location.offset == 7
    assert findings[0].location.end_offset == len(text)


def test_same_text_can_trigger_multiple_patterns() -> None:
    """Verify overlapping matches from distinct patterns are all kept."""
    findings = detect_xss("<script>x</script>", ScanOptions(sensitivity_level=4))

    assert _names(findings) == ["Script Tag", "Open Script Tag"]


def test_locator_handles_zero_width_matches() -> None:
    """Verify a pattern matching the empty string terminates."""
    pattern = Pattern(
        id="empty",
        category="content-xss",
        name="Empty",
        regex=r"a*",
        severity="low",
        description="Matches nothing",
    )

    findings = list(locate("bbb", pattern))

    assert len(findings) == 4
    assert [finding.location.offset for finding in findings] == [0, 1, 2, 3]
    assert all(finding.matched_text == "" for finding in findings)


def test_locator_is_restartable() -> None:
    """Verify each call scans from the start of the text."""
    pattern = Pattern(
        id="word",
        category="js-injection",
        name="Word",
        regex=r"spawn",
        severity="critical",
        description="Spawn",
    )

    first = list(locate("spawn spawn", pattern))
    second = list(locate("spawn spawn", pattern))

    assert first == second
    assert [finding.location.offset for finding in first] == [0, 6]


def test_detector_skips_pattern_that_fails_to_compile() -> None:
    """Verify one malformed expression does not abort the detector."""
    registry = PatternRegistry(
        [
            Pattern(
                id="broken",
                category="content-xss",
                name="Broken",
                regex=r"(unclosed",
                severity="high",
                description="Malformed expression",
            ),
            Pattern(
                id="ok",
                category="content-xss",
                name="Script Word",
                regex=r"script",
                severity="high",
                description="Plain word",
            ),
        ],
        validate=False,
    )

    findings = detect_xss("script", registry=registry)

    assert _names(findings) == ["Script Word"]


def test_disabled_sensitivity_gate_produces_no_findings() -> None:
    """Verify patterns above the sensitivity level never run."""
    text = "<script>x</script>"

    assert "Open Script Tag" not in _names(detect_xss(text, ScanOptions(sensitivity_level=3)))
    assert "Open Script Tag" in _names(detect_xss(text, ScanOptions(sensitivity_level=4)))
