#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/renderers/html.py
"""Styled HTML rendering.

This module provides the StyledHtmlRenderer class which produces a complete,
standalone HTML document: a doctype, a baseline stylesheet, an optional
``<h1>`` title and the document body.

When the document was built from HTML, the body is the original markup
re-serialized through a filter rather than regenerated from blocks, so that
inline ``style`` attributes and semantic tags survive exactly as written.
The filter drops discarded elements (scripts, styles, form controls),
unwraps unknown tags, keeps only allowlisted attributes, removes
script-capable URLs and escapes all text. Documents built directly from
blocks are rendered through an equivalent block writer.

"""

from __future__ import annotations

import logging
from typing import Optional

from richexport.ast.nodes import (
    Blockquote,
    Cell,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    Image,
    ListItem,
    MathBlock,
    Paragraph,
    RawContainer,
    Table,
    TextRun,
)
from richexport.ast.visitors import BlockVisitor
from richexport.constants import (
    CONTAINER_TAGS,
    DEFAULT_STYLESHEET,
    HEADING_TAGS,
    INLINE_MARK_TAGS,
    LIST_TAGS,
    MATH_BLOCK_CLASS,
    MATH_FORMULA_ATTRIBUTE,
    MATH_INLINE_CLASS,
    PARAGRAPH_TAGS,
    TABLE_SECTION_TAGS,
    URL_ATTRIBUTES,
    VOID_ELEMENTS,
)
from richexport.options.html import StyledHtmlOptions
from richexport.parsers.classifier import classify
from richexport.parsers.source import SourceNode
from richexport.renderers.base import BaseRenderer, RenderResult, collapse_blank_lines, merge_runs
from richexport.utils.html_utils import escape_attribute, escape_html, safe_url

logger = logging.getLogger(__name__)

# Tags re-emitted by the pass-through filter; anything else is unwrapped
PRESERVED_TAGS = (
    frozenset(HEADING_TAGS)
    | PARAGRAPH_TAGS
    | frozenset(LIST_TAGS)
    | TABLE_SECTION_TAGS
    | frozenset(INLINE_MARK_TAGS)
    | (CONTAINER_TAGS - {"html", "body"})
    | frozenset(
        {
            "li",
            "blockquote",
            "pre",
            "table",
            "tr",
            "td",
            "th",
            "colgroup",
            "col",
            "img",
            "figure",
            "br",
            "wbr",
            "hr",
        }
    )
)

# Newline after these closing tags keeps the output readable
_BLOCK_BREAK_TAGS = frozenset(HEADING_TAGS) | frozenset(
    {"p", "ul", "ol", "li", "blockquote", "pre", "table", "tr", "figure", "hr", "div", "section", "article"}
)


class StyledHtmlRenderer(BaseRenderer):
    """Render documents to a standalone, styled HTML page.

    Parameters
    ----------
    options : StyledHtmlOptions or None, default = None
        Page and filtering options

    Examples
    --------
        >>> from richexport.parsers.html import html_to_document
        >>> doc = html_to_document('<p><span style="color:#ff0000">red</span></p>')
        >>> '<span style="color:#ff0000">red</span>' in StyledHtmlRenderer().render_to_string(doc)
        True

    """

    def __init__(self, options: StyledHtmlOptions | None = None):
        """Initialize the styled HTML renderer with options."""
        BaseRenderer._validate_options_type(options, StyledHtmlOptions, "html")
        options = options or StyledHtmlOptions()
        BaseRenderer.__init__(self, options)
        self.options: StyledHtmlOptions = options

    def render(self, doc: Document, title: Optional[str] = None) -> RenderResult:
        """Render ``doc`` to a complete HTML page.

        Parameters
        ----------
        doc : Document
            The document to render
        title : str, optional
            Page title; defaults to the document's title. When a title is
            known it is also emitted as a leading ``<h1>``.

        Returns
        -------
        RenderResult
            The HTML page. Styled HTML represents every mark, so the result
            is never lossy.

        """
        if title is None:
            title = doc.title
        title = title.strip() if title else None

        if doc.source is not None:
            body = self._serialize_children(doc.source)
        else:
            body = _BlockHtmlWriter().write(doc.blocks)

        return RenderResult(content=collapse_blank_lines(self._wrap_in_document(title, body)))

    def render_to_string(self, doc: Document, title: Optional[str] = None) -> str:  # type: ignore[override]
        """Render a document to an HTML string."""
        return self.render(doc, title).content

    def _wrap_in_document(self, title: Optional[str], content: str) -> str:
        """Wrap body content in a complete HTML document."""
        parts = [
            "<!DOCTYPE html>",
            f'<html lang="{escape_attribute(self.options.language)}">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape_html(title or self.options.default_title)}</title>",
        ]

        if self.options.include_stylesheet or self.options.extra_css:
            parts.append("<style>")
            if self.options.include_stylesheet:
                parts.append(DEFAULT_STYLESHEET)
            if self.options.extra_css:
                parts.append(self.options.extra_css.strip())
            parts.append("</style>")

        parts.append("</head>")
        parts.append("<body>")
        if title:
            parts.append(f"<h1>{escape_html(title)}</h1>")
        body = content.strip("\n")
        if body:
            parts.append(body)
        parts.append("</body>")
        parts.append("</html>")
        return "\n".join(parts)

    # ------------------------------------------------------------------
    # Pass-through filter
    # ------------------------------------------------------------------

    def _serialize_children(self, node: SourceNode) -> str:
        return "".join(self._serialize(child) for child in node.children)

    def _serialize(self, node: SourceNode) -> str:
        if node.is_text:
            return escape_html(node.text)

        category = classify(node)
        if category.kind == "discard":
            return ""

        tag = node.tag_name
        if category.kind in ("math-inline", "math-block"):
            css_class = MATH_INLINE_CLASS if category.kind == "math-inline" else MATH_BLOCK_CLASS
            formula = node.get(MATH_FORMULA_ATTRIBUTE) or node.text_content
            return f'<{tag}{self._attributes(node)} class="{css_class}">{escape_html(formula)}</{tag}>'

        if tag not in PRESERVED_TAGS:
            logger.debug(f"Unwrapping unrecognized <{tag}> in styled HTML output")
            return self._serialize_children(node)

        opening = f"<{tag}{self._attributes(node)}>"
        if tag in VOID_ELEMENTS:
            return opening + ("\n" if tag == "hr" else "")

        closing = f"</{tag}>" + ("\n" if tag in _BLOCK_BREAK_TAGS else "")
        return opening + self._serialize_children(node) + closing

    def _attributes(self, node: SourceNode) -> str:
        """Serialize the kept attributes of ``node``, dropping unsafe URLs."""
        parts: list[str] = []
        for name, value in node.attributes.items():
            if name not in self.options.kept_attributes:
                continue
            if name in URL_ATTRIBUTES:
                url = safe_url(value)
                if url is None:
                    logger.debug(f"Dropping unsafe {name} attribute on <{node.tag_name}>")
                    continue
                value = url
            parts.append(f' {name}="{escape_attribute(value)}"')
        return "".join(parts)


class _BlockHtmlWriter(BlockVisitor):
    """Write blocks as HTML for documents that have no source tree."""

    def __init__(self) -> None:
        self._output: list[str] = []
        # List tags of the currently open lists; each level has an open <li>
        self._lists: list[str] = []

    def write(self, blocks: tuple) -> str:
        self._output = []
        self._lists = []
        self.visit_blocks(blocks)
        self._close_lists()
        return "".join(self._output)

    def _append_block(self, html: str) -> None:
        self._close_lists()
        self._output.append(html + "\n")

    def _close_lists(self, depth: int = 0) -> None:
        while len(self._lists) > depth:
            self._output.append(f"</li></{self._lists.pop()}>\n")

    @staticmethod
    def _style_attribute(alignment: Optional[str]) -> str:
        return f' style="text-align: {alignment}"' if alignment else ""

    def _runs(self, runs: tuple[TextRun, ...]) -> str:
        parts: list[str] = []
        for run in merge_runs(runs):
            if run.is_break:
                parts.append("<br>")
                continue
            style = run.style
            html = escape_html(run.text)
            if style.math:
                html = f'<span class="{MATH_INLINE_CLASS}">{html}</span>'
            if style.code:
                html = f"<code>{html}</code>"
            if style.superscript:
                html = f"<sup>{html}</sup>"
            if style.subscript:
                html = f"<sub>{html}</sub>"
            if style.strikethrough:
                html = f"<s>{html}</s>"
            if style.underline:
                html = f"<u>{html}</u>"
            if style.italic:
                html = f"<em>{html}</em>"
            if style.bold:
                html = f"<strong>{html}</strong>"
            declarations = []
            if style.color:
                declarations.append(f"color: {style.color}")
            if style.highlight:
                declarations.append(f"background-color: {style.highlight}")
            if declarations:
                html = f'<span style="{escape_attribute("; ".join(declarations))}">{html}</span>'
            if style.link:
                html = f'<a href="{escape_attribute(style.link)}">{html}</a>'
            parts.append(html)
        return "".join(parts)

    def visit_document(self, node: Document) -> None:
        self.visit_blocks(node.blocks)

    def visit_heading(self, node: Heading) -> None:
        level = min(6, max(1, node.level))
        self._append_block(f"<h{level}{self._style_attribute(node.alignment)}>{self._runs(node.runs)}</h{level}>")

    def visit_paragraph(self, node: Paragraph) -> None:
        self._append_block(f"<p{self._style_attribute(node.alignment)}>{self._runs(node.runs)}</p>")

    def visit_list_item(self, node: ListItem) -> None:
        tag = "ol" if node.ordered else "ul"
        # A new list element never continues the open list at its own depth
        self._close_lists(node.depth if node.list_start else node.depth + 1)
        if len(self._lists) == node.depth + 1:
            if self._lists[-1] == tag:
                self._output.append("</li>\n")
            else:
                self._close_lists(node.depth)
        while len(self._lists) < node.depth + 1:
            if len(self._lists) < node.depth:
                # Skipped levels get an empty bullet item to nest in
                self._output.append("<ul><li>")
                self._lists.append("ul")
            else:
                start = f' start="{node.index}"' if node.ordered and node.index != 1 else ""
                self._output.append(f"<{tag}{start}>\n")
                self._lists.append(tag)
        self._output.append(f"<li>{self._runs(node.runs)}")

    def visit_blockquote(self, node: Blockquote) -> None:
        self._append_block("<blockquote>")
        self.visit_blocks(node.children)
        self._append_block("</blockquote>")

    def visit_code_block(self, node: CodeBlock) -> None:
        class_attr = f' class="language-{escape_attribute(node.language)}"' if node.language else ""
        self._append_block(f"<pre><code{class_attr}>{escape_html(node.text)}</code></pre>")

    def visit_table(self, node: Table) -> None:
        rows = ["<table>"]
        if node.grid.caption:
            rows.append(f"<caption>{escape_html(node.grid.caption)}</caption>")
        for row in node.grid.rows:
            rows.append("<tr>" + "".join(self._cell(cell) for cell in row.cells) + "</tr>")
        rows.append("</table>")
        self._append_block("\n".join(rows))

    def _cell(self, cell: Cell) -> str:
        tag = "th" if cell.is_header else "td"
        spans = ""
        if cell.colspan > 1:
            spans += f' colspan="{cell.colspan}"'
        if cell.rowspan > 1:
            spans += f' rowspan="{cell.rowspan}"'
        return f"<{tag}{spans}>{self._runs(cell.runs)}</{tag}>"

    def visit_image(self, node: Image) -> None:
        src = safe_url(node.src)
        if src is None:
            return
        title = f' title="{escape_attribute(node.title)}"' if node.title else ""
        html = f'<img src="{escape_attribute(src)}" alt="{escape_attribute(node.alt)}"{title}>'
        href = safe_url(node.href)
        if href:
            html = f'<a href="{escape_attribute(href)}">{html}</a>'
        if node.caption:
            html = f"<figure>{html}<figcaption>{escape_html(node.caption)}</figcaption></figure>"
        else:
            html = f"<p>{html}</p>"
        self._append_block(html)

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        self._append_block("<hr>")

    def visit_raw_container(self, node: RawContainer) -> None:
        self._append_block("<div>")
        self.visit_blocks(node.children)
        self._append_block("</div>")

    def visit_math_block(self, node: MathBlock) -> None:
        self._append_block(f'<div class="{MATH_BLOCK_CLASS}">{escape_html(node.formula)}</div>')


def render_styled_html(doc: Document, title: Optional[str] = None, options: StyledHtmlOptions | None = None) -> str:
    """Render ``doc`` as a standalone styled HTML page."""
    return StyledHtmlRenderer(options).render_to_string(doc, title)
