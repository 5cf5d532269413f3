#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/parsers/classifier.py
"""Structural classification of HTML nodes.

``classify`` is a pure, total function: every node maps to exactly one
Category. Unrecognized tags never disappear; they become a transparent
container when they hold elements and an implicit paragraph otherwise.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from richexport.constants import (
    CONTAINER_TAGS,
    DISCARD_TAGS,
    HEADING_TAGS,
    INLINE_MARK_TAGS,
    LIST_TAGS,
    MATH_BLOCK_CLASS,
    MATH_FORMULA_ATTRIBUTE,
    MATH_INLINE_CLASS,
    PARAGRAPH_TAGS,
    TABLE_SECTION_TAGS,
)
from richexport.parsers.source import ROOT_TAG, SourceNode

CategoryKind = Literal[
    "heading",
    "paragraph",
    "inline-mark",
    "list",
    "list-item",
    "blockquote",
    "table",
    "table-row",
    "table-cell",
    "image",
    "figure",
    "line-break",
    "horizontal-rule",
    "code-block",
    "generic-container",
    "text",
    "math-inline",
    "math-block",
    "discard",
]

_BLOCK_KINDS = frozenset(
    {
        "heading",
        "paragraph",
        "list",
        "list-item",
        "blockquote",
        "table",
        "table-row",
        "table-cell",
        "figure",
        "horizontal-rule",
        "code-block",
        "generic-container",
        "math-block",
    }
)


@dataclass(frozen=True)
class Category:
    """Structural category of one node.

    Parameters
    ----------
    kind : CategoryKind
        The category name
    level : int or None
        Heading level (``heading`` only)
    ordered : bool
        Numbered list (``list`` only)
    is_header : bool
        Header cell (``table-cell`` only)
    mark : str or None
        Mark contributed by an ``inline-mark`` element (``bold``, ``link``, ``span``...)
    implicit : bool
        True when the tag was not recognized and the category is the fallback

    """

    kind: CategoryKind
    level: Optional[int] = None
    ordered: bool = False
    is_header: bool = False
    mark: Optional[str] = None
    implicit: bool = False

    @property
    def is_block(self) -> bool:
        """Whether nodes of this category start a new block."""
        return self.kind in _BLOCK_KINDS

    @property
    def is_inline(self) -> bool:
        """Whether nodes of this category flow inside a block."""
        return self.kind in {"inline-mark", "text", "line-break", "image", "math-inline"}


TEXT = Category("text")
DISCARD = Category("discard")


def _math_category(node: SourceNode) -> Optional[Category]:
    if MATH_FORMULA_ATTRIBUTE not in node.attributes:
        return None
    if MATH_BLOCK_CLASS in node.classes:
        return Category("math-block")
    if MATH_INLINE_CLASS in node.classes:
        return Category("math-inline")
    return None


def classify(node: SourceNode) -> Category:
    """Classify ``node`` into its structural category.

    Parameters
    ----------
    node : SourceNode
        Node to classify

    Returns
    -------
    Category
        The node's category. Unknown tags classify as ``generic-container``
        when they have element children and as an implicit ``paragraph``
        otherwise (both flagged ``implicit``).

    """
    if node.is_text:
        return TEXT

    tag = node.tag_name

    math = _math_category(node)
    if math is not None:
        return math

    if tag in DISCARD_TAGS:
        return DISCARD
    if tag in HEADING_TAGS:
        return Category("heading", level=HEADING_TAGS[tag])
    if tag in PARAGRAPH_TAGS:
        return Category("paragraph")
    if tag in LIST_TAGS:
        return Category("list", ordered=LIST_TAGS[tag])
    if tag == "li":
        return Category("list-item")
    if tag == "blockquote":
        return Category("blockquote")
    if tag == "table":
        return Category("table")
    if tag == "tr":
        return Category("table-row")
    if tag in ("td", "th"):
        return Category("table-cell", is_header=tag == "th")
    if tag == "img":
        return Category("image")
    if tag == "figure":
        return Category("figure")
    if tag == "br":
        return Category("line-break")
    if tag == "hr":
        return Category("horizontal-rule")
    if tag in ("pre", "listing", "xmp"):
        return Category("code-block")
    if tag in INLINE_MARK_TAGS:
        return Category("inline-mark", mark=INLINE_MARK_TAGS[tag])
    if tag in CONTAINER_TAGS or tag in TABLE_SECTION_TAGS or tag == ROOT_TAG:
        return Category("generic-container")

    if node.has_element_children():
        return Category("generic-container", implicit=True)
    return Category("paragraph", implicit=True)
