#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Every renderer is a BlockVisitor: the Document dispatches to
``visit_document`` and each block to its own ``visit_*`` method, so adding an
output format never touches the node classes.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator

from richexport.ast.nodes import (
    Block,
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


class BlockVisitor(ABC):
    """Abstract base class for document visitors.

    Subclasses implement one method per block type. ``visit_blocks`` is the
    shared helper for walking a sequence of children.

    Examples
    --------
    Counting headings:

        >>> class HeadingCounter(BlockVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_heading(self, node):
        ...         self.count += 1
        ...     # remaining visit_* methods omitted

    """

    def visit_blocks(self, blocks: Iterable[Block]) -> None:
        """Visit each block in order."""
        for block in blocks:
            block.accept(self)

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit the document root."""

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading block."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph block."""

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem block."""

    @abstractmethod
    def visit_blockquote(self, node: Blockquote) -> Any:
        """Visit a Blockquote block."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock block."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table block."""

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image block."""

    @abstractmethod
    def visit_horizontal_rule(self, node: HorizontalRule) -> Any:
        """Visit a HorizontalRule block."""

    @abstractmethod
    def visit_raw_container(self, node: RawContainer) -> Any:
        """Visit a RawContainer block."""

    @abstractmethod
    def visit_math_block(self, node: MathBlock) -> Any:
        """Visit a MathBlock block."""


def iter_blocks(blocks: Iterable[Block]) -> Iterator[Block]:
    """Yield every block depth-first, descending into quotes and containers."""
    for block in blocks:
        yield block
        if isinstance(block, (Blockquote, RawContainer)):
            yield from iter_blocks(block.children)


def iter_runs(blocks: Iterable[Block]) -> Iterator[TextRun]:
    """Yield every text run of ``blocks``, including runs inside table cells."""
    for block in iter_blocks(blocks):
        if isinstance(block, (Heading, Paragraph, ListItem)):
            yield from block.runs
        elif isinstance(block, Table):
            for row in block.grid.rows:
                for cell in row.cells:
                    yield from cell.runs
