#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/ast/nodes.py
"""AST node classes for the document conversion model.

This module defines the intermediate representation shared by every export
format. The HTML parser builds it once per request and exactly one renderer
consumes it.

Node Hierarchy
--------------
Inline level:
    - StyleSet: the composed set of formatting marks of a run
    - TextRun: a span of text carrying one StyleSet, or a line-break marker

Block level (all support the visitor pattern):
    - Heading, Paragraph, ListItem, Blockquote, CodeBlock
    - Table (wrapping a Grid of Row/Cell), Image, HorizontalRule
    - RawContainer, MathBlock

Root:
    - Document: optional title plus the ordered blocks

All nodes are frozen dataclasses. Sequence fields accept any iterable and are
stored as tuples, so a node never changes once a renderer holds it.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from richexport.constants import ALIGNMENTS

if TYPE_CHECKING:
    from richexport.parsers.source import SourceNode


def _freeze(obj: Any, name: str) -> None:
    """Store the sequence attribute ``name`` of a frozen dataclass as a tuple."""
    value = getattr(obj, name)
    if not isinstance(value, tuple):
        object.__setattr__(obj, name, tuple(value))


def _check_alignment(alignment: Optional[str]) -> None:
    if alignment is not None and alignment not in ALIGNMENTS:
        raise ValueError(f"Unsupported alignment: {alignment!r}")


# ============================================================================
# Inline model
# ============================================================================


@dataclass(frozen=True)
class StyleSet:
    """Composed formatting marks applied to a run of text.

    Marks are independent: any combination may coexist (for example bold,
    italic and a color at the same time).

    Parameters
    ----------
    bold, italic, underline, strikethrough, code : bool
        Boolean character marks
    superscript, subscript : bool
        Vertical alignment marks
    math : bool
        The run text is a formula rather than prose
    link : str or None
        Target href of an enclosing anchor
    color : str or None
        Text color, normalized to ``#rrggbb`` when possible
    highlight : str or None
        Background (highlight) color, normalized to ``#rrggbb`` when possible

    """

    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    code: bool = False
    superscript: bool = False
    subscript: bool = False
    math: bool = False
    link: Optional[str] = None
    color: Optional[str] = None
    highlight: Optional[str] = None

    def with_marks(self, **changes: Any) -> StyleSet:
        """Return a copy of this style with ``changes`` applied."""
        return replace(self, **changes) if changes else self

    @property
    def marks(self) -> frozenset[str]:
        """Names of every active mark."""
        return frozenset(f.name for f in fields(self) if getattr(self, f.name))

    @property
    def is_plain(self) -> bool:
        """Whether no mark at all is active."""
        return not self.marks


@dataclass(frozen=True)
class TextRun:
    """A span of text sharing one StyleSet.

    ``text`` is never empty, except for line-break markers, which carry
    ``is_break=True`` and empty text.

    """

    text: str
    style: StyleSet = field(default_factory=StyleSet)
    is_break: bool = False

    def __post_init__(self) -> None:
        if self.is_break and self.text:
            raise ValueError("Line-break runs must not carry text")
        if not self.is_break and not self.text:
            raise ValueError("Text runs must not be empty")

    @classmethod
    def line_break(cls, style: StyleSet | None = None) -> TextRun:
        """Create a line-break marker run."""
        return cls(text="", style=style or StyleSet(), is_break=True)


def runs_to_text(runs: Iterable[TextRun], break_text: str = "\n") -> str:
    """Concatenate the text of ``runs``, rendering breaks as ``break_text``."""
    return "".join(break_text if run.is_break else run.text for run in runs)


# ============================================================================
# Block-level nodes
# ============================================================================


class Node(ABC):
    """Base class for all AST nodes, supporting the visitor pattern."""

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Dispatch to the matching ``visit_*`` method of ``visitor``."""


@dataclass(frozen=True)
class Heading(Node):
    """Section heading.

    Parameters
    ----------
    level : int
        Heading level, 1 through 6
    runs : sequence of TextRun
        Inline content
    alignment : str or None
        Paragraph alignment from the source markup

    """

    level: int
    runs: tuple[TextRun, ...] = ()
    alignment: Optional[str] = None

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}")
        _check_alignment(self.alignment)
        _freeze(self, "runs")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_heading(self)


@dataclass(frozen=True)
class Paragraph(Node):
    """Paragraph of inline content."""

    runs: tuple[TextRun, ...] = ()
    alignment: Optional[str] = None

    def __post_init__(self) -> None:
        _check_alignment(self.alignment)
        _freeze(self, "runs")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_paragraph(self)


@dataclass(frozen=True)
class ListItem(Node):
    """One entry of a flattened list.

    Parameters
    ----------
    depth : int
        Nesting depth, 0 for top-level items
    ordered : bool
        Whether the enclosing list is numbered
    index : int
        1-based ordinal within the enclosing list node (only meaningful when ordered)
    runs : sequence of TextRun
        The item's own inline content
    list_start : bool, default False
        True on the first entry of each distinct list element, so that
        sibling lists at the same depth stay apart after flattening

    """

    depth: int
    ordered: bool
    index: int
    runs: tuple[TextRun, ...] = ()
    list_start: bool = False

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"List depth must be >= 0, got {self.depth}")
        if self.index < 0:
            raise ValueError(f"List index must be >= 0, got {self.index}")
        _freeze(self, "runs")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_list_item(self)


@dataclass(frozen=True)
class Blockquote(Node):
    """Quoted content.

    The quote keeps its inner blocks; ``runs`` offers the flattened inline view
    with a break marker between consecutive inner blocks.

    """

    children: tuple["Block", ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "children")

    @property
    def runs(self) -> tuple[TextRun, ...]:
        """Inline content of every inner block, separated by line breaks."""
        result: list[TextRun] = []
        for block in self.children:
            block_runs = block_inline_runs(block)
            if not block_runs:
                continue
            if result:
                result.append(TextRun.line_break())
            result.extend(block_runs)
        return tuple(result)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_blockquote(self)


@dataclass(frozen=True)
class CodeBlock(Node):
    """Preformatted code, kept verbatim."""

    text: str
    language: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_code_block(self)


@dataclass(frozen=True)
class Cell:
    """Table cell.

    ``colspan``/``rowspan`` record the source spans; they are informational and
    never expanded into repeated cells.

    """

    is_header: bool = False
    runs: tuple[TextRun, ...] = ()
    colspan: int = 1
    rowspan: int = 1

    def __post_init__(self) -> None:
        _freeze(self, "runs")


@dataclass(frozen=True)
class Row:
    """Table row; rows of one grid may hold different cell counts."""

    cells: tuple[Cell, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "cells")


@dataclass(frozen=True)
class Grid:
    """Row-major table content."""

    rows: tuple[Row, ...] = ()
    caption: Optional[str] = None

    def __post_init__(self) -> None:
        _freeze(self, "rows")

    @property
    def column_count(self) -> int:
        """Cell count of the widest row."""
        return max((len(row.cells) for row in self.rows), default=0)

    @property
    def is_rectangular(self) -> bool:
        """Whether every row has the same number of cells."""
        return len({len(row.cells) for row in self.rows}) <= 1


@dataclass(frozen=True)
class Table(Node):
    """Table block wrapping a Grid."""

    grid: Grid = field(default_factory=Grid)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table(self)


@dataclass(frozen=True)
class Image(Node):
    """Image or figure.

    Parameters
    ----------
    src : str
        Image URL, passed through unresolved
    alt : str
        Alternative text
    title : str or None
        Title attribute
    caption : str or None
        Figure caption, when the image came from a ``<figure>``
    href : str or None
        Link target when the image was wrapped in an anchor

    """

    src: str
    alt: str = ""
    title: Optional[str] = None
    caption: Optional[str] = None
    href: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_image(self)


@dataclass(frozen=True)
class HorizontalRule(Node):
    """Thematic break."""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_horizontal_rule(self)


@dataclass(frozen=True)
class RawContainer(Node):
    """Transparent container (div, section, unknown tags with element children)."""

    children: tuple["Block", ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "children")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_raw_container(self)


@dataclass(frozen=True)
class MathBlock(Node):
    """Display formula (source notation is passed through untouched)."""

    formula: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_math_block(self)


Block = Union[Heading, Paragraph, ListItem, Blockquote, CodeBlock, Table, Image, HorizontalRule, RawContainer, MathBlock]


@dataclass(frozen=True)
class Document:
    """Root of one conversion request.

    Parameters
    ----------
    blocks : sequence of Block
        Top-level blocks in document order
    title : str or None
        Optional document title supplied with the request
    source : SourceNode or None
        Parse tree the blocks were built from, kept for pass-through renderers

    """

    blocks: tuple[Block, ...] = ()
    title: Optional[str] = None
    source: Optional["SourceNode"] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        _freeze(self, "blocks")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_document(self)


def block_inline_runs(block: Block) -> tuple[TextRun, ...]:
    """Return the inline runs carried directly by ``block`` (empty for structural blocks)."""
    if isinstance(block, (Heading, Paragraph, ListItem)):
        return block.runs
    if isinstance(block, Blockquote):
        return block.runs
    if isinstance(block, RawContainer):
        result: list[TextRun] = []
        for child in block.children:
            child_runs = block_inline_runs(child)
            if child_runs:
                if result:
                    result.append(TextRun.line_break())
                result.extend(child_runs)
        return tuple(result)
    if isinstance(block, CodeBlock) and block.text:
        return (TextRun(text=block.text, style=StyleSet(code=True)),)
    if isinstance(block, MathBlock) and block.formula:
        return (TextRun(text=block.formula, style=StyleSet(math=True)),)
    if isinstance(block, Image) and block.alt:
        return (TextRun(text=block.alt),)
    return ()
