#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_lists_tables.py
"""Unit tests for list flattening and table extraction."""

import pytest

from richexport.api import to_document
from richexport.ast.nodes import runs_to_text
from richexport.parsers.lists import flatten_list
from richexport.parsers.source import parse_html
from richexport.parsers.tables import extract_table


def first_element(html):
    return parse_html(html).element_children[0]


def entries(html):
    return [(item.depth, item.ordered, item.index, runs_to_text(item.runs)) for item in flatten_list(first_element(html))]


@pytest.mark.unit
class TestFlattenList:
    """Tests for flatten_list."""

    def test_flat_unordered(self):
        assert entries("<ul><li>one</li><li>two</li></ul>") == [
            (0, False, 1, "one"),
            (0, False, 2, "two"),
        ]

    def test_nested_ordered_counters_restart(self):
        html = "<ol><li>a</li><li>a<ol><li>b</li><li>b</li></ol></li><li>a</li></ol>"
        assert entries(html) == [
            (0, True, 1, "a"),
            (0, True, 2, "a"),
            (1, True, 1, "b"),
            (1, True, 2, "b"),
            (0, True, 3, "a"),
        ]

    def test_mixed_nesting(self):
        html = "<ol><li>step<ul><li>detail</li></ul></li></ol>"
        assert entries(html) == [(0, True, 1, "step"), (1, False, 1, "detail")]

    def test_start_attribute(self):
        assert [index for _, _, index, _ in entries('<ol start="4"><li>x</li><li>y</li></ol>')] == [4, 5]

    def test_invalid_start_falls_back(self):
        assert entries('<ol start="abc"><li>x</li></ol>')[0][2] == 1

    def test_whitespace_between_items_is_ignored(self):
        assert len(entries("<ul>\n  <li>one</li>\n  <li>two</li>\n</ul>")) == 2

    def test_empty_item_is_kept(self):
        assert entries("<ul><li></li><li>x</li></ul>") == [(0, False, 1, ""), (0, False, 2, "x")]

    def test_list_directly_inside_list(self):
        assert entries("<ul><li>a</li><ul><li>b</li></ul></ul>") == [
            (0, False, 1, "a"),
            (1, False, 1, "b"),
        ]

    def test_paragraphs_inside_item_are_separated(self):
        assert entries("<ul><li><p>one</p><p>two</p></li></ul>") == [(0, False, 1, "one\ntwo")]

    def test_item_marks_are_preserved(self):
        item = flatten_list(first_element("<ul><li><strong>x</strong></li></ul>"))[0]
        assert item.runs[0].style.bold

    def test_first_entry_of_each_list_starts_a_list(self):
        html = "<ul><li>a<ul><li>b</li><li>c</li></ul><ol><li>d</li></ol></li><li>e</li></ul>"
        assert [item.list_start for item in flatten_list(first_element(html))] == [True, True, False, True, False]

    def test_sibling_lists_stay_apart(self):
        doc = to_document("<ul><li>a</li></ul><ul><li>b</li><li>c</li></ul>")
        assert [(item.depth, item.list_start) for item in doc.blocks] == [(0, True), (0, True), (0, False)]


@pytest.mark.unit
class TestExtractTable:
    """Tests for extract_table."""

    def test_header_and_body_cells(self):
        grid = extract_table(first_element("<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"))
        assert len(grid.rows) == 2
        assert [cell.is_header for cell in grid.rows[0].cells] == [True, True]
        assert [runs_to_text(cell.runs) for cell in grid.rows[1].cells] == ["1", "2"]

    def test_ragged_rows_are_kept(self):
        grid = extract_table(first_element("<table><tr><td>a</td><td>b</td></tr><tr><td>c</td></tr></table>"))
        assert [len(row.cells) for row in grid.rows] == [2, 1]
        assert grid.column_count == 2
        assert not grid.is_rectangular

    def test_sections_are_ordered(self):
        html = (
            "<table><tfoot><tr><td>foot</td></tr></tfoot>"
            "<tbody><tr><td>body</td></tr></tbody>"
            "<thead><tr><th>head</th></tr></thead></table>"
        )
        grid = extract_table(first_element(html))
        assert [runs_to_text(row.cells[0].runs) for row in grid.rows] == ["head", "body", "foot"]

    def test_spans_are_recorded(self):
        grid = extract_table(first_element('<table><tr><td colspan="2" rowspan="x">wide</td></tr></table>'))
        cell = grid.rows[0].cells[0]
        assert cell.colspan == 2
        assert cell.rowspan == 1

    def test_caption(self):
        grid = extract_table(first_element("<table><caption> Totals </caption><tr><td>1</td></tr></table>"))
        assert grid.caption == "Totals"

    def test_cell_marks(self):
        grid = extract_table(first_element("<table><tr><td><em>x</em></td></tr></table>"))
        assert grid.rows[0].cells[0].runs[0].style.italic

    def test_empty_table(self):
        grid = extract_table(first_element("<table></table>"))
        assert grid.rows == ()
        assert grid.column_count == 0
