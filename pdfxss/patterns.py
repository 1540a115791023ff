"""Detection pattern table.

Patterns are grouped by category and listed in registration order, which
is also the order findings are reported in. Adding a rule is a change to
this table only.
"""

from models import Pattern

XSS_PATTERNS: tuple[Pattern, ...] = (
    Pattern(
        id="script-tag",
        category="content-xss",
        name="Script Tag",
        regex=r"<script[\s\S]*?>[\s\S]*?</script>",
        severity="high",
        description="Found <script> tags that may execute JavaScript",
    ),
    Pattern(
        id="javascript-protocol",
        category="content-xss",
        name="JavaScript Protocol",
        regex=r"javascript\s*:",
        severity="high",
        description="Found javascript: protocol that may execute code",
    ),
    Pattern(
        id="event-handler",
        category="content-xss",
        name="Event Handler",
        regex=r"""on(load|click|mouseover|mouse\w+|key\w+)\s*=\s*["']?[^"']*["']?""",
        severity="medium",
        description="Found event handlers that may execute JavaScript",
    ),
    Pattern(
        id="iframe-element",
        category="content-xss",
        name="iFrame Element",
        regex=r"<iframe[\s\S]*?>[\s\S]*?</iframe>",
        severity="high",
        description="Found <iframe> elements that may load malicious content",
    ),
    Pattern(
        id="document-write",
        category="content-xss",
        name="Document Write",
        regex=r"document\.write\s*\(",
        severity="medium",
        description="Found document.write() calls that may inject content",
    ),
    Pattern(
        id="eval-function",
        category="content-xss",
        name="Eval Function",
        regex=r"eval\s*\(",
        severity="critical",
        description="Found eval() calls that execute arbitrary code",
    ),
    Pattern(
        id="function-constructor",
        category="content-xss",
        name="Function Constructor",
        regex=r"new\s+Function\s*\(",
        severity="critical",
        description="Found Function constructor that may execute arbitrary code",
    ),
    Pattern(
        id="timer-functions",
        category="content-xss",
        name="Timer Functions",
        regex=r"set(Timeout|Interval)\s*\(",
        severity="medium",
        description="Found setTimeout or setInterval that may execute code",
    ),
    Pattern(
        id="data-uri-html",
        category="content-xss",
        name="HTML Data URI",
        regex=r"data:text/html[^,]*,",
        severity="high",
        description="Data URI with HTML content detected",
        min_sensitivity=2,
    ),
    Pattern(
        id="data-uri-javascript",
        category="content-xss",
        name="JavaScript Data URI",
        regex=r"data:text/javascript[^,]*,",
        severity="high",
        description="Data URI with JavaScript content detected",
        min_sensitivity=2,
    ),
    Pattern(
        id="dom-manipulation",
        category="content-xss",
        name="DOM Manipulation",
        regex=r"(innerHTML|outerHTML|insertAdjacentHTML)\s*=",
        severity="high",
        description="Direct DOM manipulation detected",
        min_sensitivity=2,
    ),
    Pattern(
        id="meta-refresh-javascript",
        category="content-xss",
        name="Meta Refresh JavaScript",
        regex=(
            r"""<meta[^>]*http-equiv=["']?refresh["']?[^>]*"""
            r"""content=["']?[^"']*url=[^"']*javascript:"""
        ),
        severity="high",
        description="Meta refresh with JavaScript detected",
        min_sensitivity=2,
    ),
    Pattern(
        id="svg-script",
        category="content-xss",
        name="SVG Script",
        regex=r"<svg[^>]*>[\s\S]*<script[^>]*>[\s\S]*?</script>[\s\S]*</svg>",
        severity="high",
        description="SVG with embedded script detected",
        min_sensitivity=2,
    ),
    Pattern(
        id="alert-function",
        category="content-xss",
        name="Alert Function",
        regex=r"alert\s*\([^)]*\)",
        severity="medium",
        description="Alert function detected",
        min_sensitivity=2,
    ),
    Pattern(
        id="prompt-function",
        category="content-xss",
        name="Prompt Function",
        regex=r"prompt\s*\([^)]*\)",
        severity="medium",
        description="Prompt function detected",
        min_sensitivity=2,
    ),
    Pattern(
        id="confirm-function",
        category="content-xss",
        name="Confirm Function",
        regex=r"confirm\s*\([^)]*\)",
        severity="medium",
        description="Confirm function detected",
        min_sensitivity=2,
    ),
    Pattern(
        id="base64-script",
        category="content-xss",
        name="Base64 Script",
        # "PHNjcmlwdD" is the base64 prefix of "<script"
        regex=r"base64[^,]*PHNjcmlwdD",
        severity="medium",
        description="Potential base64 encoded script detected",
        min_sensitivity=2,
    ),
    Pattern(
        id="expression-binding",
        category="content-xss",
        name="Expression Binding",
        regex=r"\{\{.+\}\}|\[\(.+\)\]|\[(innerHTML|outerHTML)\]",
        severity="medium",
        description="Framework expression binding detected (Angular/Vue/etc)",
        min_sensitivity=3,
    ),
    Pattern(
        id="css-expression",
        category="content-xss",
        name="CSS Expression",
        regex=r"expression\s*\([^)]*\)",
        severity="medium",
        description="CSS expression detected",
        min_sensitivity=3,
    ),
    Pattern(
        id="obfuscated-script",
        category="content-xss",
        name="Obfuscated Script Tag",
        regex=(
            r"(?:\\x3C|\\u003C)\s*(?:\\x73|\\u0073)\s*(?:\\x63|\\u0063)\s*"
            r"(?:\\x72|\\u0072)\s*(?:\\x69|\\u0069)\s*(?:\\x70|\\u0070)\s*"
            r"(?:\\x74|\\u0074)"
        ),
        severity="high",
        description="Obfuscated script tag detected",
        min_sensitivity=3,
    ),
    Pattern(
        id="script-tag-open",
        category="content-xss",
        name="Open Script Tag",
        regex=r"<script[^>]*>",
        severity="high",
        description="Open script tag detected in content",
        min_sensitivity=4,
    ),
    Pattern(
        id="extended-event-handler",
        category="content-xss",
        name="Extended Event Handler",
        regex=r"on(submit|focus|blur|change|error)\s*=",
        severity="medium",
        description="HTML event handler detected in content",
        min_sensitivity=5,
    ),
)

JS_INJECTION_PATTERNS: tuple[Pattern, ...] = (
    Pattern(
        id="acrobat-api-call",
        category="js-injection",
        name="Acrobat API Call",
        regex=r"app\.(\w+)\s*\(",
        severity="high",
        description="Found calls to Acrobat JavaScript API",
    ),
    Pattern(
        id="pdf-object-method",
        category="js-injection",
        name="PDF Object Method Call",
        regex=r"this\.(\w+)\s*\(",
        severity="medium",
        description="Found calls to PDF object methods",
    ),
    Pattern(
        id="form-field-access",
        category="js-injection",
        name="Form Field Access",
        regex=r"\bgetField\s*\(",
        severity="medium",
        description="Found attempts to access form fields",
    ),
    Pattern(
        id="alert-dialog",
        category="js-injection",
        name="Alert Dialog",
        regex=r"\bapp\.alert\s*\(",
        severity="low",
        description="Found alert dialog calls",
    ),
    Pattern(
        id="execute-menu-item",
        category="js-injection",
        name="Execute Menu Item",
        regex=r"\bapp\.execMenuItem\s*\(",
        severity="critical",
        description="Found attempts to execute menu commands",
    ),
    Pattern(
        id="process-spawn",
        category="js-injection",
        name="Process Spawn",
        regex=r"\bspawn\s*\(",
        severity="critical",
        description="Found attempts to spawn processes",
    ),
    Pattern(
        id="shell-command",
        category="js-injection",
        name="Shell Command",
        regex=r"\bshell\s*\.\s*\w+",
        severity="critical",
        description="Found potential shell command execution",
    ),
)

FORM_INJECTION_PATTERNS: tuple[Pattern, ...] = (
    Pattern(
        id="html-form",
        category="form-injection",
        name="HTML Form",
        regex=r"<form[\s\S]*?>[\s\S]*?</form>",
        severity="medium",
        description="Found HTML form elements that may submit data",
    ),
    Pattern(
        id="form-submission",
        category="form-injection",
        name="Form Submission",
        regex=r"submit\s*\(",
        severity="medium",
        description="Found form submission calls",
    ),
    Pattern(
        id="form-data-format",
        category="form-injection",
        name="Form Data Format",
        regex=r"FDF|XFDF",
        severity="low",
        description="Found references to FDF/XFDF form data formats",
    ),
    Pattern(
        id="acroform-structure",
        category="form-injection",
        name="AcroForm Structure",
        regex=r"/AcroForm",
        severity="low",
        description="Found AcroForm dictionary structure",
    ),
    Pattern(
        id="xfa-form",
        category="form-injection",
        name="XFA Form",
        regex=r"/XFA",
        severity="medium",
        description="Found XFA (XML Forms Architecture) references",
    ),
    Pattern(
        id="form-submit-action",
        category="form-injection",
        name="Form Submit Action",
        regex=r"/A\s*<<\s*/S\s*/SubmitForm",
        severity="high",
        description="Found form submission action in PDF",
    ),
)

DEFAULT_PATTERNS: tuple[Pattern, ...] = (
    *XSS_PATTERNS,
    *JS_INJECTION_PATTERNS,
    *FORM_INJECTION_PATTERNS,
)
