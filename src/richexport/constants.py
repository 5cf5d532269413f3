#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/constants.py
"""Constants shared across the richexport conversion engine.

Tag tables used by the node classifier, default layout values for the
document-object renderer, the baseline stylesheet for styled HTML exports,
and the content types of every export target live here so that parsers,
renderers and the HTTP service agree on them.

"""

from __future__ import annotations

from typing import Literal

# ---------------------------------------------------------------------------
# Tag classification tables
# ---------------------------------------------------------------------------

HEADING_TAGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}

PARAGRAPH_TAGS = frozenset({"p", "address", "summary", "dt", "dd", "figcaption", "caption", "legend"})

LIST_TAGS = {"ul": False, "ol": True, "menu": False, "dir": False}

TABLE_SECTION_TAGS = frozenset({"thead", "tbody", "tfoot"})

# Inline tags mapped to the mark they contribute.  "span" means the element is
# transparent but may still contribute marks through its ``style`` attribute.
INLINE_MARK_TAGS = {
    "strong": "bold",
    "b": "bold",
    "em": "italic",
    "i": "italic",
    "cite": "italic",
    "dfn": "italic",
    "var": "italic",
    "u": "underline",
    "ins": "underline",
    "s": "strikethrough",
    "strike": "strikethrough",
    "del": "strikethrough",
    "code": "code",
    "kbd": "code",
    "samp": "code",
    "tt": "code",
    "a": "link",
    "mark": "highlight",
    "sup": "superscript",
    "sub": "subscript",
    "font": "span",
    "span": "span",
    "small": "span",
    "big": "span",
    "abbr": "span",
    "acronym": "span",
    "q": "span",
    "time": "span",
    "label": "span",
    "bdi": "span",
    "bdo": "span",
    "data": "span",
    "nobr": "span",
}

CONTAINER_TAGS = frozenset(
    {
        "div",
        "section",
        "article",
        "main",
        "header",
        "footer",
        "nav",
        "aside",
        "body",
        "html",
        "center",
        "details",
        "fieldset",
        "form",
        "hgroup",
        "dl",
        "search",
    }
)

DISCARD_TAGS = frozenset(
    {
        "script",
        "style",
        "template",
        "noscript",
        "head",
        "meta",
        "link",
        "title",
        "base",
        "iframe",
        "object",
        "embed",
        "svg",
        "canvas",
        "input",
        "button",
        "select",
        "textarea",
    }
)

# Editor markup for formulas (``<span class="math-inline" data-formula="...">``).
MATH_INLINE_CLASS = "math-inline"
MATH_BLOCK_CLASS = "math-block"
MATH_FORMULA_ATTRIBUTE = "data-formula"

DEFAULT_HIGHLIGHT_COLOR = "#ffff00"

Alignment = Literal["left", "center", "right", "justify"]
ALIGNMENTS = frozenset({"left", "center", "right", "justify"})

# ---------------------------------------------------------------------------
# Document-object layout defaults (spacing units: 1/20 of a point)
# ---------------------------------------------------------------------------

DEFAULT_TITLE_SPACING_AFTER = 200
DEFAULT_HEADING_SPACING_BEFORE = 240
DEFAULT_HEADING_SPACING_AFTER = 120
DEFAULT_PARAGRAPH_SPACING_AFTER = 120
DEFAULT_LIST_SPACING = 100
DEFAULT_QUOTE_SPACING = 200
DEFAULT_INDENT_STEP = 720
DEFAULT_HANGING_INDENT = 360
DEFAULT_HEADER_SHADING = "EEEEEE"
DEFAULT_QUOTE_BORDER_COLOR = "CCCCCC"
DEFAULT_QUOTE_BORDER_SIZE = 4
DEFAULT_CODE_SHADING = "F5F5F5"
DEFAULT_CODE_FONT = "Courier New"
DEFAULT_DOCUMENT_DESCRIPTION = "Exported from richexport"
DEFAULT_BULLET_MARKER = "•"
DEFAULT_DOCX_FONT = "Calibri"
DEFAULT_DOCX_FONT_SIZE = 11
DEFAULT_CODE_FONT_SIZE = 10

# ---------------------------------------------------------------------------
# Styled HTML
# ---------------------------------------------------------------------------

DEFAULT_HTML_TITLE = "Exported Document"
DEFAULT_HTML_LANGUAGE = "en"

# Attributes that carry document meaning and survive the styled-HTML pass-through.
SEMANTIC_ATTRIBUTES = frozenset(
    {
        "style",
        "href",
        "src",
        "alt",
        "title",
        "colspan",
        "rowspan",
        "start",
        "reversed",
        "type",
        "width",
        "height",
        "lang",
        "dir",
        "align",
        "scope",
        "headers",
        "cite",
        "datetime",
        "value",
    }
)

# Schemes that must never survive into exported href/src values.
DANGEROUS_SCHEMES = frozenset(
    {
        "javascript:",
        "vbscript:",
        "data:text/html",
        "data:text/javascript",
        "data:application/javascript",
        "data:application/x-javascript",
    }
)

URL_ATTRIBUTES = frozenset({"href", "src", "cite"})

VOID_ELEMENTS = frozenset(
    {"area", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)

DEFAULT_STYLESHEET = """
body {
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Oxygen, Ubuntu, Cantarell,
        "Open Sans", "Helvetica Neue", sans-serif;
    line-height: 1.6;
    color: #0f172a;
    background-color: #ffffff;
    max-width: 800px;
    margin: 0 auto;
    padding: 2rem;
}

h1, h2, h3, h4, h5, h6 {
    margin-top: 2rem;
    margin-bottom: 1rem;
    font-weight: 600;
    line-height: 1.25;
}

h1 { font-size: 2rem; border-bottom: 1px solid #e2e8f0; padding-bottom: 0.5rem; }
h2 { font-size: 1.5rem; }
h3 { font-size: 1.25rem; }

p { margin-bottom: 1rem; }

a { color: #3b82f6; text-decoration: none; }
a:hover { text-decoration: underline; }

code {
    font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, "Liberation Mono", "Courier New", monospace;
    font-size: 0.9em;
    background-color: #f1f5f9;
    padding: 0.2em 0.4em;
    border-radius: 3px;
}

pre {
    background-color: #f1f5f9;
    border-radius: 6px;
    padding: 1rem;
    overflow: auto;
    margin-bottom: 1rem;
}

pre code { background-color: transparent; padding: 0; border-radius: 0; }

ul, ol { margin-bottom: 1rem; padding-left: 2rem; }

blockquote {
    margin: 0 0 1rem 0;
    padding: 0.5rem 1rem;
    border-left: 3px solid #e2e8f0;
    color: #64748b;
}

table { border-collapse: collapse; width: 100%; margin-bottom: 1rem; }
table, th, td { border: 1px solid #e2e8f0; }
th, td { padding: 0.5rem; text-align: left; }
th { background-color: #f8fafc; font-weight: 600; }

img { max-width: 100%; height: auto; }

hr { border: none; border-top: 1px solid #e2e8f0; margin: 2rem 0; }
""".strip()

# ---------------------------------------------------------------------------
# Export targets
# ---------------------------------------------------------------------------

ExportTargetName = Literal["txt", "markdown", "html", "docx", "json"]

CONTENT_TYPE_TEXT = "text/plain"
CONTENT_TYPE_MARKDOWN = "text/markdown"
CONTENT_TYPE_HTML = "text/html"
CONTENT_TYPE_DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
CONTENT_TYPE_JSON = "application/json"

TARGET_ALIASES = {"md": "markdown", "text": "txt", "htm": "html", "word": "docx"}

DEFAULT_FILE_NAME = "document"

# ---------------------------------------------------------------------------
# Service defaults
# ---------------------------------------------------------------------------

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_CONTENT_BYTES = 10 * 1024 * 1024
