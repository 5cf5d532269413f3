#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/richexport/renderers/__init__.py
"""Renderers for converting the document model to export formats.

Every renderer is a visitor over the same Document, so one parse feeds any
number of outputs:

- PlainTextRenderer: newline-delimited text with no formatting
- MarkdownRenderer: CommonMark with GFM tables and strikethrough
- DocumentObjectRenderer: layout-explicit GenericDoc for office serializers
- DocxSerializer: Microsoft Word .docx via python-docx (imported on use)
- StyledHtmlRenderer: standalone HTML page preserving inline styles

Text renderers return a RenderResult whose ``lossy`` flag reports styling
the format could not carry.

Examples
--------
    >>> from richexport.parsers import html_to_document
    >>> from richexport.renderers import MarkdownRenderer
    >>> result = MarkdownRenderer().render(html_to_document('<p><span style="color:red">red</span></p>'))
    >>> result.content, result.lossy
    ('red', True)

"""

from richexport.renderers.base import BaseRenderer, RenderResult
from richexport.renderers.docobject import (
    DocBorder,
    DocImage,
    DocNumbering,
    DocParagraph,
    DocRule,
    DocRun,
    DocTable,
    DocTableCell,
    DocumentObjectRenderer,
    GenericDoc,
    render_document_object,
)
from richexport.renderers.docx import DocxSerializer, render_docx
from richexport.renderers.html import StyledHtmlRenderer, render_styled_html
from richexport.renderers.markdown import MarkdownRenderer, render_markdown
from richexport.renderers.plaintext import PlainTextRenderer, render_text

__all__ = [
    "BaseRenderer",
    "DocBorder",
    "DocImage",
    "DocNumbering",
    "DocParagraph",
    "DocRule",
    "DocRun",
    "DocTable",
    "DocTableCell",
    "DocumentObjectRenderer",
    "DocxSerializer",
    "GenericDoc",
    "MarkdownRenderer",
    "PlainTextRenderer",
    "RenderResult",
    "StyledHtmlRenderer",
    "render_document_object",
    "render_docx",
    "render_markdown",
    "render_styled_html",
    "render_text",
]
