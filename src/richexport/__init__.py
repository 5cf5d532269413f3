"""richexport - Convert rich-text editor HTML into export formats.

richexport turns the HTML produced by a WYSIWYG editor into plain text,
Markdown, a standalone styled HTML page, a Word document, or a JSON
description of the document layout.

Every export runs one pipeline: the HTML is parsed with BeautifulSoup into
an immutable source tree, each node is classified into a structural
category, and the converter builds a Document of blocks (headings,
paragraphs, flattened list items, tables...) whose text is split into
styled runs. Renderers are visitors over that Document.

Key Features
------------
- Total classification: unknown tags are transparent containers, never errors
- Nested lists flattened to explicit depth and per-list numbering
- Tables extracted as grids without assuming rectangularity
- Lossy conversions flagged rather than silently dropping styling
- Atomic file output: a failed export never leaves a partial file
- Flask HTTP service and an argparse command line

Examples
--------
Convert editor HTML to Markdown:

    >>> from richexport import export
    >>> result = export("<p><strong>bold</strong> and <em>italic</em></p>", "markdown")
    >>> result.content
    '**bold** and *italic*'

Work with the document model directly:

    >>> from richexport import render_text, to_document
    >>> doc = to_document("<ol><li>one</li><li>two</li></ol>")
    >>> print(render_text(doc))
    1. one
    2. two

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from richexport.api import (
    EXPORT_TARGETS,
    ExportResult,
    ExportTarget,
    export,
    get_export_target,
    register_export_target,
    to_document,
)
from richexport.ast.nodes import Document
from richexport.exceptions import (
    EmptyInputError,
    InvalidOptionsError,
    RenderingError,
    RichExportError,
    SerializationError,
    UnsupportedTargetError,
    ValidationError,
)
from richexport.options import (
    DocumentObjectOptions,
    DocxOptions,
    MarkdownOptions,
    PlainTextOptions,
    StyledHtmlOptions,
)
from richexport.renderers.base import RenderResult
from richexport.renderers.docobject import GenericDoc, render_document_object
from richexport.renderers.docx import render_docx
from richexport.renderers.html import render_styled_html
from richexport.renderers.markdown import render_markdown
from richexport.renderers.plaintext import render_text

__all__ = [
    "__version__",
    "EXPORT_TARGETS",
    "Document",
    "DocumentObjectOptions",
    "DocxOptions",
    "EmptyInputError",
    "ExportResult",
    "ExportTarget",
    "GenericDoc",
    "InvalidOptionsError",
    "MarkdownOptions",
    "PlainTextOptions",
    "RenderResult",
    "RenderingError",
    "RichExportError",
    "SerializationError",
    "StyledHtmlOptions",
    "UnsupportedTargetError",
    "ValidationError",
    "export",
    "get_export_target",
    "register_export_target",
    "render_document_object",
    "render_docx",
    "render_markdown",
    "render_styled_html",
    "render_text",
    "to_document",
]
