#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/ast/__init__.py
"""Document model shared by the HTML parser and every renderer."""

from richexport.ast.nodes import (
    Block,
    Blockquote,
    Cell,
    CodeBlock,
    Document,
    Grid,
    Heading,
    HorizontalRule,
    Image,
    ListItem,
    MathBlock,
    Node,
    Paragraph,
    RawContainer,
    Row,
    StyleSet,
    Table,
    TextRun,
    block_inline_runs,
    runs_to_text,
)
from richexport.ast.visitors import BlockVisitor, iter_blocks, iter_runs

__all__ = [
    "Block",
    "BlockVisitor",
    "Blockquote",
    "Cell",
    "CodeBlock",
    "Document",
    "Grid",
    "Heading",
    "HorizontalRule",
    "Image",
    "ListItem",
    "MathBlock",
    "Node",
    "Paragraph",
    "RawContainer",
    "Row",
    "StyleSet",
    "Table",
    "TextRun",
    "block_inline_runs",
    "iter_blocks",
    "iter_runs",
    "runs_to_text",
]
