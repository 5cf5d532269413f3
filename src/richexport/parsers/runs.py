#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/parsers/runs.py
"""Inline run construction.

The run builder walks the children of one block-level node depth-first and
emits a TextRun per text node, carrying every mark accumulated from the
inline elements between the block boundary and that text. Adjacent runs are
never merged here; renderers decide how to normalize.

Malformed markup is recovered rather than rejected:

- block elements nested in inline context are flattened, separated from
  surrounding content by line-break markers;
- an anchor wrapping block content does not carry its href into that
  content;
- images that reach the run builder degrade to their alt text.

"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from richexport.ast.nodes import StyleSet, TextRun
from richexport.constants import DEFAULT_HIGHLIGHT_COLOR, MATH_FORMULA_ATTRIBUTE
from richexport.parsers.classifier import Category, classify
from richexport.parsers.source import SourceNode
from richexport.utils.css import normalize_color, parse_style_attribute, style_marks
from richexport.utils.html_utils import normalize_text, safe_url

logger = logging.getLogger(__name__)

_BOOLEAN_MARKS = frozenset({"bold", "italic", "underline", "strikethrough", "code", "superscript", "subscript"})


def element_style(node: SourceNode, category: Category, style: StyleSet) -> StyleSet:
    """Compose the marks contributed by an inline element onto ``style``.

    Parameters
    ----------
    node : SourceNode
        The inline element
    category : Category
        Its classification (``inline-mark``)
    style : StyleSet
        Marks inherited from the ancestors

    Returns
    -------
    StyleSet
        The composed style for the element's subtree

    """
    changes: dict = {}
    mark = category.mark

    if mark in _BOOLEAN_MARKS:
        changes[mark] = True
        # the innermost vertical alignment wins
        if mark == "superscript":
            changes["subscript"] = False
        elif mark == "subscript":
            changes["superscript"] = False
    elif mark == "link":
        href = safe_url(node.get("href"))
        if href:
            changes["link"] = href
    elif mark == "highlight":
        declarations = parse_style_attribute(node.get("style"))
        changes["highlight"] = (
            normalize_color(node.get("data-color"))
            or normalize_color(declarations.get("background-color"))
            or DEFAULT_HIGHLIGHT_COLOR
        )

    if node.tag_name == "font":
        color = normalize_color(node.get("color"))
        if color:
            changes["color"] = color

    declared = style_marks(node.get("style"))
    if mark == "highlight":
        declared.pop("highlight", None)
    changes.update(declared)

    return style.with_marks(**changes)


def block_style(node: SourceNode) -> StyleSet:
    """Marks declared by a block element's own inline style."""
    return StyleSet().with_marks(**style_marks(node.get("style")))


class _RunCollector:
    """Accumulates runs for one block and applies HTML whitespace rules."""

    def __init__(self) -> None:
        self.runs: list[TextRun] = []
        self._pending_break = False

    # -- emission -----------------------------------------------------------

    def add_text(self, text: str, style: StyleSet, preserve: bool = False) -> None:
        if not preserve:
            text = normalize_text(text)
        if not text:
            return
        if self._pending_break:
            self._flush_pending_break()
        self.runs.append(_PreservedRun(text, style) if preserve else TextRun(text=text, style=style))

    def add_break(self, style: StyleSet) -> None:
        self._pending_break = False
        self.runs.append(TextRun.line_break(style))

    def request_break(self) -> None:
        """Separate whatever comes next from the current content (block boundary)."""
        if self.runs and not self.runs[-1].is_break:
            self._pending_break = True

    def _flush_pending_break(self) -> None:
        self._pending_break = False
        if self.runs and not self.runs[-1].is_break:
            self.runs.append(TextRun.line_break())

    # -- normalization ------------------------------------------------------

    def finish(self) -> list[TextRun]:
        """Trim collapsible whitespace at block edges and around breaks."""
        result: list[TextRun] = []
        at_line_start = True
        for run in self.runs:
            if run.is_break:
                _rstrip_last(result)
                result.append(run)
                at_line_start = True
                continue
            if isinstance(run, _PreservedRun):
                result.append(run)
                at_line_start = run.text.endswith("\n")
                continue
            text = run.text
            if at_line_start or (result and _ends_with_space(result[-1])):
                text = text.lstrip(" ")
            if not text:
                continue
            result.append(TextRun(text=text, style=run.style))
            at_line_start = False
        _rstrip_last(result)

        # breaks at the block edges carry no content
        while result and result[0].is_break:
            result.pop(0)
        while result and result[-1].is_break:
            result.pop()
            _rstrip_last(result)

        return [TextRun(text=run.text, style=run.style) if isinstance(run, _PreservedRun) else run for run in result]


class _PreservedRun(TextRun):
    """Run whose whitespace is significant (text from ``<pre>``)."""


def _ends_with_space(run: TextRun) -> bool:
    return not run.is_break and run.text.endswith(" ") and not isinstance(run, _PreservedRun)


def _rstrip_last(result: list[TextRun]) -> None:
    while result and not result[-1].is_break:
        last = result[-1]
        if isinstance(last, _PreservedRun):
            return
        stripped = last.text.rstrip(" ")
        if stripped:
            if stripped != last.text:
                result[-1] = TextRun(text=stripped, style=last.style)
            return
        result.pop()


class _RunBuilder:
    """Depth-first walk over inline content."""

    def __init__(self) -> None:
        self.collector = _RunCollector()

    def walk(self, nodes: Iterable[SourceNode], style: StyleSet, preserve: bool = False) -> None:
        for node in nodes:
            self.visit(node, style, preserve)

    def visit(self, node: SourceNode, style: StyleSet, preserve: bool = False) -> None:
        category = classify(node)
        kind = category.kind

        if kind == "text":
            self.collector.add_text(node.text, style, preserve)
        elif kind == "discard":
            return
        elif kind == "line-break":
            self.collector.add_break(style)
        elif kind == "inline-mark":
            self.walk(node.children, element_style(node, category, style), preserve)
        elif kind == "math-inline":
            formula = node.get(MATH_FORMULA_ATTRIBUTE, "").strip()
            if formula:
                self.collector.add_text(formula, style.with_marks(math=True), preserve=True)
        elif kind == "image":
            alt = (node.get("alt") or "").strip()
            if alt:
                self.collector.add_text(alt, style, preserve)
        elif category.implicit and kind == "paragraph":
            # unknown inline-looking tag: transparent
            self.walk(node.children, style, preserve)
        elif category.is_block:
            self._visit_block_descendant(node, category, style, preserve)
        else:
            self.walk(node.children, style, preserve)

    def _visit_block_descendant(self, node: SourceNode, category: Category, style: StyleSet, preserve: bool) -> None:
        if style.link is not None:
            logger.debug("Anchor wraps block <%s>; dropping href %r for its content", node.tag_name, style.link)
            style = style.with_marks(link=None)

        self.collector.request_break()
        if category.kind == "math-block":
            formula = node.get(MATH_FORMULA_ATTRIBUTE, "").strip()
            if formula:
                self.collector.add_text(formula, style.with_marks(math=True), preserve=True)
        elif category.kind == "code-block":
            self.walk(node.children, style.with_marks(code=True), preserve=True)
        elif category.kind == "horizontal-rule":
            pass
        else:
            self.walk(node.children, style.with_marks(**style_marks(node.get("style"))), preserve)
        self.collector.request_break()


def build_runs_from_nodes(nodes: Iterable[SourceNode], base_style: Optional[StyleSet] = None) -> list[TextRun]:
    """Build text runs from a sequence of sibling nodes.

    Parameters
    ----------
    nodes : iterable of SourceNode
        Sibling nodes forming one block's inline content
    base_style : StyleSet, optional
        Marks applied to every produced run

    Returns
    -------
    list of TextRun
        Runs in document order, whitespace-normalized

    """
    builder = _RunBuilder()
    builder.walk(nodes, base_style or StyleSet())
    return builder.collector.finish()


def build_runs(node: SourceNode, base_style: Optional[StyleSet] = None) -> list[TextRun]:
    """Build the text runs of a block-level node's children.

    Marks compose along the ancestor chain: ``<strong><em>x</em></strong>``
    yields one run ``x`` that is both bold and italic. ``<br>`` yields a
    line-break marker run.

    Parameters
    ----------
    node : SourceNode
        Block-level node whose children are the inline content
    base_style : StyleSet, optional
        Marks applied to every produced run

    Returns
    -------
    list of TextRun
        Runs in document order

    Examples
    --------
        >>> from richexport.parsers.source import parse_html
        >>> p = parse_html("<p><strong>bold</strong> and <em>italic</em></p>").children[0]
        >>> [(r.text, sorted(r.style.marks)) for r in build_runs(p)]
        [('bold', ['bold']), (' and ', []), ('italic', ['italic'])]

    """
    return build_runs_from_nodes(node.children, base_style)


def is_image_only(node: SourceNode) -> bool:
    """Whether an inline node is an image, or an anchor/mark wrapping nothing but images.

    Such nodes are lifted out of the enclosing paragraph as Image blocks; an
    image wrapped together with text inside one mark stays inline and
    degrades to its alt text.
    """
    category = classify(node)
    if category.kind == "image":
        return bool(safe_url(node.get("src")))
    if category.kind != "inline-mark":
        return False
    content = [child for child in node.children if not child.is_blank() or child.is_element]
    return bool(content) and all(child.is_element and is_image_only(child) for child in content)
