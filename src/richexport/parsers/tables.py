#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/parsers/tables.py
"""Extraction of HTML tables into row-major grids.

Rows are collected from ``<thead>``, then ``<tbody>`` and direct ``<tr>``
children, then ``<tfoot>``, whatever their order in the markup. Spans are
recorded on the cell but never expanded, and short rows are kept short.
"""

from __future__ import annotations

import logging
from typing import Iterator

from richexport.ast.nodes import Cell, Grid, Row
from richexport.parsers.classifier import classify
from richexport.parsers.runs import block_style, build_runs, build_runs_from_nodes
from richexport.parsers.source import SourceNode
from richexport.utils.html_utils import normalize_text

logger = logging.getLogger(__name__)


def _span(node: SourceNode, name: str) -> int:
    value = node.get(name)
    if value is None:
        return 1
    try:
        return max(1, int(value.strip()))
    except ValueError:
        return 1


def _iter_rows(table: SourceNode) -> Iterator[SourceNode]:
    head: list[SourceNode] = []
    body: list[SourceNode] = []
    foot: list[SourceNode] = []
    for child in table.element_children:
        if child.tag_name == "thead":
            head.extend(c for c in child.element_children if c.tag_name == "tr")
        elif child.tag_name == "tfoot":
            foot.extend(c for c in child.element_children if c.tag_name == "tr")
        elif child.tag_name == "tbody":
            body.extend(c for c in child.element_children if c.tag_name == "tr")
        elif child.tag_name == "tr":
            body.append(child)
    yield from head
    yield from body
    yield from foot


def extract_row(row: SourceNode) -> Row:
    """Build one Row from a ``<tr>`` element."""
    cells: list[Cell] = []
    for child in row.children:
        category = classify(child)
        if category.kind == "table-cell":
            cells.append(
                Cell(
                    is_header=category.is_header,
                    runs=build_runs(child, block_style(child)),
                    colspan=_span(child, "colspan"),
                    rowspan=_span(child, "rowspan"),
                )
            )
        elif category.kind != "discard" and not child.is_blank():
            logger.debug("Treating stray <%s> inside a table row as a cell", child.tag_name or "#text")
            cells.append(Cell(is_header=False, runs=build_runs_from_nodes([child])))
    return Row(cells=cells)


def extract_table(node: SourceNode) -> Grid:
    """Extract a table element into a Grid.

    Parameters
    ----------
    node : SourceNode
        A ``<table>`` element

    Returns
    -------
    Grid
        Row-major cells; ``<th>`` cells carry ``is_header=True``. Rows may
        have different lengths when the markup does.

    Examples
    --------
        >>> from richexport.parsers.source import parse_html
        >>> root = parse_html("<table><tr><th>A</th><th>B</th></tr><tr><td>1</td></tr></table>")
        >>> [len(r.cells) for r in extract_table(root.children[0]).rows]
        [2, 1]

    """
    rows = [extract_row(row) for row in _iter_rows(node)]

    caption = None
    for child in node.element_children:
        if child.tag_name == "caption":
            caption = normalize_text(child.text_content).strip() or None
            break

    grid = Grid(rows=rows, caption=caption)
    if not grid.is_rectangular:
        logger.debug("Table rows have differing cell counts; keeping them as-is")
    return grid
