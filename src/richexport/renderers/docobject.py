#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/renderers/docobject.py
"""Generic document object rendering.

This module provides the DocumentObjectRenderer, which turns the document
model into a ``GenericDoc``: a flat, layout-explicit description of the
document that an office-document serializer can write without knowing
anything about HTML. Paragraph spacing and indentation are explicit values
(twentieths of a point), list items carry their enumeration kind and marker
text, and colors are bare ``RRGGBB`` hex strings.

The GenericDoc is the hand-off contract to :mod:`richexport.renderers.docx`
and is also exported verbatim as JSON.

"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Optional, Union

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
    StyleSet,
    Table,
    TextRun,
)
from richexport.ast.visitors import BlockVisitor
from richexport.options.docobject import DocumentObjectOptions
from richexport.renderers.base import BaseRenderer, merge_runs

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")

ParagraphKind = Literal["title", "heading", "paragraph", "list-item", "quote", "code", "math", "caption"]


# ============================================================================
# Generic document model
# ============================================================================


@dataclass(frozen=True)
class DocRun:
    """A run of text with explicit character formatting.

    ``color`` and ``highlight`` are ``RRGGBB`` hex strings without ``#``.
    A run with ``is_break`` set is a line break within its paragraph.
    """

    text: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    code: bool = False
    superscript: bool = False
    subscript: bool = False
    color: Optional[str] = None
    highlight: Optional[str] = None
    link: Optional[str] = None
    font: Optional[str] = None
    is_break: bool = False


@dataclass(frozen=True)
class DocNumbering:
    """Explicit enumeration of a list item.

    Parameters
    ----------
    kind : {"bullet", "number"}
        Enumeration kind
    level : int
        Nesting level, 0 for top-level items
    marker : str
        Literal marker text, e.g. ``"•"`` or ``"3."``
    index : int
        1-based position within the source list

    """

    kind: Literal["bullet", "number"]
    level: int
    marker: str
    index: int


@dataclass(frozen=True)
class DocBorder:
    color: str
    size: int


@dataclass(frozen=True)
class DocParagraph:
    """A paragraph with explicit layout.

    Spacing and indentation are in twentieths of a point.
    """

    kind: ParagraphKind
    runs: tuple[DocRun, ...] = ()
    level: int = 0
    alignment: Optional[str] = None
    spacing_before: int = 0
    spacing_after: int = 0
    indent_left: int = 0
    indent_hanging: int = 0
    numbering: Optional[DocNumbering] = None
    border_left: Optional[DocBorder] = None
    shading: Optional[str] = None


@dataclass(frozen=True)
class DocTableCell:
    runs: tuple[DocRun, ...] = ()
    is_header: bool = False
    shading: Optional[str] = None
    colspan: int = 1
    rowspan: int = 1


@dataclass(frozen=True)
class DocTable:
    """A table; rows may have different lengths."""

    rows: tuple[tuple[DocTableCell, ...], ...] = ()
    column_count: int = 0
    caption: Optional[str] = None
    indent_left: int = 0


@dataclass(frozen=True)
class DocImage:
    src: str
    alt: str = ""
    title: Optional[str] = None
    caption: Optional[str] = None
    href: Optional[str] = None
    indent_left: int = 0


@dataclass(frozen=True)
class DocRule:
    pass


DocElement = Union[DocParagraph, DocTable, DocImage, DocRule]

_ELEMENT_TYPES: dict[type, str] = {
    DocParagraph: "paragraph",
    DocTable: "table",
    DocImage: "image",
    DocRule: "rule",
}


@dataclass(frozen=True)
class GenericDoc:
    """Layout-explicit document handed to office-document serializers.

    Parameters
    ----------
    title : str or None
        Document title, also stored in the document properties
    description : str
        Document description for the document properties
    elements : tuple of DocElement
        Body content in reading order

    """

    title: Optional[str] = None
    description: str = ""
    elements: tuple[DocElement, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain data, tagging each element with its ``type``."""
        elements = []
        for element in self.elements:
            data = asdict(element)
            data["type"] = _ELEMENT_TYPES[type(element)]
            elements.append(data)
        return {"title": self.title, "description": self.description, "elements": elements}

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def hex_color(value: Optional[str]) -> Optional[str]:
    """Convert a ``#rrggbb`` color to ``RRGGBB``, or None when it is not a hex color.

    Examples
    --------
        >>> hex_color("#ff0000")
        'FF0000'
        >>> hex_color("red") is None
        True

    """
    if not value:
        return None
    match = _HEX_COLOR.match(value.strip())
    return match.group(1).upper() if match else None


# ============================================================================
# Renderer
# ============================================================================


class DocumentObjectRenderer(BlockVisitor, BaseRenderer):
    """Render documents to a GenericDoc.

    Parameters
    ----------
    options : DocumentObjectOptions or None, default = None
        Layout constants

    Examples
    --------
        >>> from richexport.parsers.html import html_to_document
        >>> generic = DocumentObjectRenderer().render(html_to_document("<ul><li>a</li></ul>"))
        >>> generic.elements[0].numbering.marker
        '•'

    """

    def __init__(self, options: DocumentObjectOptions | None = None):
        """Initialize the document-object renderer with options."""
        BaseRenderer._validate_options_type(options, DocumentObjectOptions, "docobject")
        options = options or DocumentObjectOptions()
        BaseRenderer.__init__(self, options)
        self.options: DocumentObjectOptions = options
        self._elements: list[DocElement] = []
        self._quote_depth: int = 0

    def render(self, doc: Document) -> GenericDoc:
        """Render ``doc`` to a GenericDoc.

        Parameters
        ----------
        doc : Document
            The document to render

        Returns
        -------
        GenericDoc
            The layout-explicit document object

        """
        self._elements = []
        self._quote_depth = 0
        doc.accept(self)
        return GenericDoc(title=doc.title, description=self.options.description, elements=tuple(self._elements))

    def render_to_string(self, doc: Document) -> str:
        """Render the document object as indented JSON."""
        return self.render(doc).to_json()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _convert_runs(self, runs: tuple[TextRun, ...], **overrides: Any) -> tuple[DocRun, ...]:
        converted: list[DocRun] = []
        for run in merge_runs(runs):
            if run.is_break:
                converted.append(DocRun(is_break=True))
                continue
            converted.append(self._convert_run(run.text, run.style, **overrides))
        return tuple(converted)

    def _convert_run(self, text: str, style: StyleSet, **overrides: Any) -> DocRun:
        color = hex_color(style.color)
        if style.color and color is None:
            logger.debug(f"Dropping non-hex text color {style.color!r}")
        highlight = hex_color(style.highlight)
        if style.highlight and highlight is None:
            logger.debug(f"Dropping non-hex highlight {style.highlight!r}")

        values: dict[str, Any] = {
            "text": text,
            "bold": style.bold,
            "italic": style.italic or style.math,
            "underline": style.underline,
            "strikethrough": style.strikethrough,
            "code": style.code,
            "superscript": style.superscript,
            "subscript": style.subscript,
            "color": color,
            "highlight": highlight,
            "link": style.link,
            "font": self.options.code_font if style.code else None,
        }
        values.update(overrides)
        return DocRun(**values)

    def _quote_layout(self) -> dict[str, Any]:
        """Layout overrides applied to every paragraph inside a quote."""
        if not self._quote_depth:
            return {}
        return {
            "indent_left": self.options.indent_step * self._quote_depth,
            "border_left": DocBorder(color=self.options.quote_border_color, size=self.options.quote_border_size),
            "spacing_before": self.options.quote_spacing,
            "spacing_after": self.options.quote_spacing,
        }

    def _add_paragraph(self, kind: ParagraphKind, runs: tuple[DocRun, ...], **layout: Any) -> None:
        if not any(run.text.strip() for run in runs if not run.is_break):
            return
        self._elements.append(DocParagraph(kind=kind, runs=runs, **layout))

    # ------------------------------------------------------------------
    # Visitor methods
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        if node.title:
            self._add_paragraph(
                "title",
                (DocRun(text=node.title, bold=True),),
                alignment="center",
                spacing_after=self.options.title_spacing_after,
            )
        self.visit_blocks(node.blocks)

    def visit_heading(self, node: Heading) -> None:
        layout: dict[str, Any] = {
            "level": node.level,
            "alignment": node.alignment,
            "spacing_before": self.options.heading_spacing_before,
            "spacing_after": self.options.heading_spacing_after,
        }
        quote = self._quote_layout()
        quote.pop("spacing_before", None)
        quote.pop("spacing_after", None)
        layout.update(quote)
        self._add_paragraph("heading", self._convert_runs(node.runs), **layout)

    def visit_paragraph(self, node: Paragraph) -> None:
        layout: dict[str, Any] = {"alignment": node.alignment, "spacing_after": self.options.paragraph_spacing_after}
        layout.update(self._quote_layout())
        kind: ParagraphKind = "quote" if self._quote_depth else "paragraph"
        self._add_paragraph(kind, self._convert_runs(node.runs), **layout)

    def visit_list_item(self, node: ListItem) -> None:
        if node.ordered:
            numbering = DocNumbering(kind="number", level=node.depth, marker=f"{node.index}.", index=node.index)
        else:
            numbering = DocNumbering(
                kind="bullet", level=node.depth, marker=self.options.bullet_marker, index=node.index
            )
        quote_indent = self.options.indent_step * self._quote_depth
        paragraph = DocParagraph(
            kind="list-item",
            runs=self._convert_runs(node.runs),
            level=node.depth,
            spacing_before=self.options.list_spacing,
            spacing_after=self.options.list_spacing,
            indent_left=quote_indent + self.options.indent_step * (node.depth + 1),
            indent_hanging=self.options.hanging_indent,
            numbering=numbering,
            border_left=self._quote_layout().get("border_left"),
        )
        # Items keep their marker even when the content is empty
        self._elements.append(paragraph)

    def visit_blockquote(self, node: Blockquote) -> None:
        self._quote_depth += 1
        try:
            self.visit_blocks(node.children)
        finally:
            self._quote_depth -= 1

    def visit_code_block(self, node: CodeBlock) -> None:
        runs: list[DocRun] = []
        for i, line in enumerate(node.text.split("\n")):
            if i:
                runs.append(DocRun(is_break=True))
            if line:
                runs.append(DocRun(text=line, code=True, font=self.options.code_font))
        if not runs:
            return
        self._elements.append(
            DocParagraph(
                kind="code",
                runs=tuple(runs),
                spacing_after=self.options.paragraph_spacing_after,
                indent_left=self.options.indent_step * self._quote_depth,
                shading=self.options.code_shading,
            )
        )

    def visit_table(self, node: Table) -> None:
        grid = node.grid
        if not grid.rows:
            return
        rows = tuple(tuple(self._convert_cell(cell) for cell in row.cells) for row in grid.rows)
        self._elements.append(
            DocTable(
                rows=rows,
                column_count=grid.column_count,
                caption=grid.caption,
                indent_left=self.options.indent_step * self._quote_depth,
            )
        )

    def _convert_cell(self, cell: Cell) -> DocTableCell:
        if cell.is_header:
            return DocTableCell(
                runs=self._convert_runs(cell.runs, bold=True),
                is_header=True,
                shading=self.options.header_shading,
                colspan=cell.colspan,
                rowspan=cell.rowspan,
            )
        return DocTableCell(runs=self._convert_runs(cell.runs), colspan=cell.colspan, rowspan=cell.rowspan)

    def visit_image(self, node: Image) -> None:
        self._elements.append(
            DocImage(
                src=node.src,
                alt=node.alt,
                title=node.title,
                caption=node.caption,
                href=node.href,
                indent_left=self.options.indent_step * self._quote_depth,
            )
        )

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        self._elements.append(DocRule())

    def visit_raw_container(self, node: RawContainer) -> None:
        self.visit_blocks(node.children)

    def visit_math_block(self, node: MathBlock) -> None:
        self._add_paragraph(
            "math",
            (DocRun(text=node.formula, italic=True),),
            alignment="center",
            spacing_after=self.options.paragraph_spacing_after,
            indent_left=self.options.indent_step * self._quote_depth,
        )


def render_document_object(doc: Document, options: DocumentObjectOptions | None = None) -> GenericDoc:
    """Render ``doc`` to a GenericDoc."""
    return DocumentObjectRenderer(options).render(doc)
