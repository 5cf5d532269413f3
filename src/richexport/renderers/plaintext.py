#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/renderers/plaintext.py
"""Plain text rendering from the document model.

This module provides the PlainTextRenderer class which degrades every block
to newline-delimited text. All character formatting is dropped; structure
survives only as indentation, list prefixes, ``> `` quote prefixes and
separator-joined table cells.

Blocks are separated by one blank line, except consecutive list items,
which follow each other line by line. Table rows are never padded: a row
emits exactly the cells it has. Three or more consecutive newlines never
appear in the output.

"""

from __future__ import annotations

import logging

from richexport.ast.nodes import (
    Blockquote,
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
from richexport.options.plaintext import PlainTextOptions
from richexport.renderers.base import BaseRenderer, LossTracker, RenderResult, finalize_text, join_blocks

logger = logging.getLogger(__name__)

HORIZONTAL_RULE_TEXT = "---"


class PlainTextRenderer(BlockVisitor, LossTracker, BaseRenderer):
    """Render documents to plain, unformatted text.

    Parameters
    ----------
    options : PlainTextOptions or None, default = None
        Plain text rendering options

    Examples
    --------
    Basic usage:

        >>> from richexport.ast import Document, ListItem, TextRun
        >>> doc = Document(blocks=[
        ...     ListItem(depth=0, ordered=True, index=1, runs=[TextRun("first")]),
        ...     ListItem(depth=1, ordered=False, index=1, runs=[TextRun("nested")]),
        ... ])
        >>> print(PlainTextRenderer().render_to_string(doc))
        1. first
          • nested

    """

    _unsupported_marks = frozenset({"color", "highlight"})

    def __init__(self, options: PlainTextOptions | None = None):
        """Initialize the plain text renderer with options."""
        BaseRenderer._validate_options_type(options, PlainTextOptions, "plaintext")
        options = options or PlainTextOptions()
        BaseRenderer.__init__(self, options)
        self.options: PlainTextOptions = options
        # (text, is_list_item) chunks in output order
        self._chunks: list[tuple[str, bool, bool]] = []
        self._lost_styles: set[str] = set()

    def render(self, doc: Document) -> RenderResult:
        """Render ``doc`` and report any styling the text could not carry.

        Parameters
        ----------
        doc : Document
            The document to render

        Returns
        -------
        RenderResult
            Text plus the lossy flag

        """
        self._chunks = []
        self._lost_styles = set()
        doc.accept(self)
        content = finalize_text(join_blocks(self._chunks))
        lost = frozenset(self._lost_styles)
        if lost:
            logger.info("Plain text output dropped unsupported styles: %s", ", ".join(sorted(lost)))
        return RenderResult(content=content, lossy=bool(lost), lost_styles=lost)

    def render_to_string(self, doc: Document) -> str:
        """Render a document to a plain text string."""
        return self.render(doc).content

    def _emit(self, text: str, is_list_item: bool = False) -> None:
        if text.strip():
            self._chunks.append((text, is_list_item, False))

    def _runs_text(self, runs: tuple[TextRun, ...], break_text: str = "\n") -> str:
        parts: list[str] = []
        for run in runs:
            if run.is_break:
                parts.append(break_text)
            else:
                self._record_losses(run.style)
                parts.append(run.text)
        return "".join(parts)

    # ------------------------------------------------------------------
    # Visitor methods
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        if node.title:
            title = node.title
            if self.options.underline_title:
                title = f"{title}\n{self.options.underline_char * len(title)}"
            self._emit(title)
        self.visit_blocks(node.blocks)

    def visit_heading(self, node: Heading) -> None:
        self._emit(self._runs_text(node.runs))

    def visit_paragraph(self, node: Paragraph) -> None:
        self._emit(self._runs_text(node.runs))

    def visit_list_item(self, node: ListItem) -> None:
        indent = "  " * node.depth
        marker = f"{node.index}. " if node.ordered else self.options.bullet
        continuation = "\n" + indent + " " * len(marker)
        text = self._runs_text(node.runs, break_text=continuation)
        starts_list = node.list_start and node.depth == 0
        self._chunks.append((f"{indent}{marker}{text}".rstrip(), True, starts_list))

    def visit_blockquote(self, node: Blockquote) -> None:
        saved = self._chunks
        self._chunks = []
        self.visit_blocks(node.children)
        inner = join_blocks(self._chunks)
        self._chunks = saved
        if not inner.strip():
            return
        lines = [f"> {line}" if line.strip() else ">" for line in inner.split("\n")]
        self._emit("\n".join(lines))

    def visit_code_block(self, node: CodeBlock) -> None:
        self._emit(node.text.rstrip())

    def visit_table(self, node: Table) -> None:
        lines: list[str] = []
        if node.grid.caption:
            lines.append(node.grid.caption)
        for row in node.grid.rows:
            cells = [self._runs_text(cell.runs, break_text=" ") for cell in row.cells]
            lines.append(self.options.table_cell_separator.join(cells).rstrip())
        self._emit("\n".join(lines))

    def visit_image(self, node: Image) -> None:
        lines = [text for text in (node.alt, node.caption) if text]
        self._emit("\n".join(lines))

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        self._emit(HORIZONTAL_RULE_TEXT)

    def visit_raw_container(self, node: RawContainer) -> None:
        self.visit_blocks(node.children)

    def visit_math_block(self, node: MathBlock) -> None:
        self._emit(node.formula)


def render_text(doc: Document, options: PlainTextOptions | None = None) -> str:
    """Render ``doc`` as plain text."""
    return PlainTextRenderer(options).render_to_string(doc)
