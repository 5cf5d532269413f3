#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_docobject_renderer.py
"""Unit tests for DocumentObjectRenderer."""

import json

import pytest

from richexport.api import to_document
from richexport.exceptions import InvalidOptionsError
from richexport.options import DocumentObjectOptions, DocxOptions
from richexport.renderers.docobject import (
    DocBorder,
    DocImage,
    DocParagraph,
    DocRule,
    DocRun,
    DocTable,
    DocumentObjectRenderer,
    hex_color,
    render_document_object,
)


def generic(html, options=None, **kwargs):
    return render_document_object(to_document(html, **kwargs), options)


@pytest.mark.unit
class TestParagraphs:
    """Tests for paragraph elements."""

    def test_title(self):
        title = generic("<p>x</p>", title="Report").elements[0]
        assert title.kind == "title"
        assert title.runs == (DocRun(text="Report", bold=True),)
        assert title.alignment == "center"
        assert title.spacing_after == 200

    def test_heading_layout(self):
        heading = generic("<h2>Intro</h2>").elements[0]
        assert (heading.kind, heading.level) == ("heading", 2)
        assert (heading.spacing_before, heading.spacing_after) == (240, 120)

    def test_paragraph_runs(self):
        paragraph = generic('<p><b>bold</b> <a href="https://example.com">link</a></p>').elements[0]
        assert paragraph.kind == "paragraph"
        assert paragraph.spacing_after == 120
        assert paragraph.runs[0] == DocRun(text="bold", bold=True)
        assert paragraph.runs[-1].link == "https://example.com"

    def test_run_colors_are_hex(self):
        run = generic('<p><span style="color:red; background-color: rgb(255,255,0)">x</span></p>').elements[0].runs[0]
        assert run.color == "FF0000"
        assert run.highlight == "FFFF00"

    def test_non_hex_color_is_dropped(self):
        run = generic('<p><span style="color: rebeccapurple">x</span></p>').elements[0].runs[0]
        assert run.color is None

    def test_inline_code_gets_code_font(self):
        run = generic("<p><code>x</code></p>").elements[0].runs[0]
        assert run.code
        assert run.font == "Courier New"

    def test_line_break_run(self):
        runs = generic("<p>a<br>b</p>").elements[0].runs
        assert [run.is_break for run in runs] == [False, True, False]

    def test_alignment(self):
        assert generic('<p style="text-align:justify">x</p>').elements[0].alignment == "justify"


@pytest.mark.unit
class TestListItems:
    """Tests for numbering and indentation."""

    def test_bullet_numbering(self):
        item = generic("<ul><li>x</li></ul>").elements[0]
        assert item.kind == "list-item"
        assert item.numbering.kind == "bullet"
        assert item.numbering.marker == "•"
        assert (item.indent_left, item.indent_hanging) == (720, 360)
        assert (item.spacing_before, item.spacing_after) == (100, 100)

    def test_ordered_numbering_and_depth(self):
        html = "<ol><li>a<ol><li>b</li><li>c</li></ol></li></ol>"
        items = generic(html).elements
        assert [item.numbering.marker for item in items] == ["1.", "1.", "2."]
        assert [item.level for item in items] == [0, 1, 1]
        assert [item.indent_left for item in items] == [720, 1440, 1440]

    def test_empty_item_is_kept(self):
        items = generic("<ul><li></li></ul>").elements
        assert len(items) == 1
        assert items[0].runs == ()

    def test_custom_marker(self):
        item = generic("<ul><li>x</li></ul>", DocumentObjectOptions(bullet_marker="-")).elements[0]
        assert item.numbering.marker == "-"


@pytest.mark.unit
class TestQuotesAndCode:
    """Tests for quote borders and code blocks."""

    def test_quote_paragraph(self):
        quote = generic("<blockquote><p>q</p></blockquote>").elements[0]
        assert quote.kind == "quote"
        assert quote.indent_left == 720
        assert quote.border_left == DocBorder(color="CCCCCC", size=4)
        assert (quote.spacing_before, quote.spacing_after) == (200, 200)

    def test_nested_quote_indent(self):
        quote = generic("<blockquote><blockquote><p>q</p></blockquote></blockquote>").elements[0]
        assert quote.indent_left == 1440

    def test_heading_inside_quote_keeps_heading_spacing(self):
        heading = generic("<blockquote><h3>h</h3></blockquote>").elements[0]
        assert heading.kind == "heading"
        assert heading.border_left is not None
        assert heading.spacing_before == 240

    def test_list_inside_quote(self):
        item = generic("<blockquote><ul><li>x</li></ul></blockquote>").elements[0]
        assert item.indent_left == 1440
        assert item.border_left is not None

    def test_code_block_lines(self):
        code = generic("<pre>a\n\nb</pre>").elements[0]
        assert code.kind == "code"
        assert code.shading == "F5F5F5"
        assert [(run.text, run.is_break) for run in code.runs] == [
            ("a", False),
            ("", True),
            ("", True),
            ("b", False),
        ]
        assert all(run.font == "Courier New" for run in code.runs if not run.is_break)

    def test_empty_code_block_is_skipped(self):
        assert generic("<pre></pre><p>x</p>").elements[0].kind == "paragraph"

    def test_math_block(self):
        math = generic('<div class="math-block" data-formula="E=mc^2"></div>').elements[0]
        assert math.kind == "math"
        assert math.runs[0].italic


@pytest.mark.unit
class TestTablesImagesRules:
    """Tests for non-paragraph elements."""

    def test_table(self):
        table = generic("<table><tr><th>A</th><th>B</th></tr><tr><td>1</td></tr></table>").elements[0]
        assert isinstance(table, DocTable)
        assert table.column_count == 2
        header = table.rows[0][0]
        assert header.is_header
        assert header.shading == "EEEEEE"
        assert header.runs[0].bold
        assert len(table.rows[1]) == 1
        assert not table.rows[1][0].runs[0].bold

    def test_empty_table_is_skipped(self):
        assert generic("<table></table>").elements == ()

    def test_image(self):
        image = generic('<figure><img src="a.png" alt="A"><figcaption>Cap</figcaption></figure>').elements[0]
        assert image == DocImage(src="a.png", alt="A", caption="Cap")

    def test_rule(self):
        assert generic("<hr>").elements == (DocRule(),)

    def test_unknown_container_is_transparent(self):
        paragraph = generic("<foo><p>x</p></foo>").elements[0]
        assert isinstance(paragraph, DocParagraph)
        assert paragraph.runs[0].text == "x"


@pytest.mark.unit
class TestSerialization:
    """Tests for the JSON form."""

    def test_to_dict_tags_elements(self):
        data = generic("<h1>T</h1><hr><table><tr><td>x</td></tr></table>", title="Doc").to_dict()
        assert data["title"] == "Doc"
        assert data["description"] == "Exported from richexport"
        assert [element["type"] for element in data["elements"]] == ["paragraph", "paragraph", "rule", "table"]

    def test_json_keeps_unicode(self):
        output = DocumentObjectRenderer().render_to_string(to_document("<p>café</p>"))
        assert "café" in output
        assert json.loads(output)["elements"][0]["runs"][0]["text"] == "café"

    def test_hex_color(self):
        assert hex_color("#a0b1c2") == "A0B1C2"
        assert hex_color("red") is None
        assert hex_color(None) is None


@pytest.mark.unit
class TestOptions:
    """Tests for options validation."""

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            DocumentObjectRenderer(DocxOptions())  # type: ignore[arg-type]

    def test_invalid_shading(self):
        with pytest.raises(ValueError):
            DocumentObjectOptions(header_shading="#EEEEEE")

    def test_negative_spacing(self):
        with pytest.raises(ValueError):
            DocumentObjectOptions(list_spacing=-1)
