#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_markdown_renderer.py
"""Unit tests for MarkdownRenderer.

Tests cover:
- Inline mark nesting and spacing
- Delimiter runs next to punctuation and other delimiters
- Lists, tables, quotes and code fences
- Escaping of literal Markdown syntax
- Lossy reporting

"""

import pytest

from richexport.api import to_document
from richexport.ast.nodes import Document, Paragraph, StyleSet, TextRun
from richexport.exceptions import InvalidOptionsError
from richexport.options import MarkdownOptions, PlainTextOptions
from richexport.renderers.markdown import MarkdownRenderer, render_markdown


def md(html, options=None, **kwargs):
    return render_markdown(to_document(html, **kwargs), options).content


@pytest.mark.unit
class TestInlineMarks:
    """Tests for inline formatting."""

    def test_bold_and_italic(self):
        assert md("<p><strong>bold</strong> and <em>italic</em></p>") == "**bold** and *italic*"

    def test_bold_wraps_italic(self):
        assert md("<p><em><strong>x</strong></em></p>") == "***x***"

    def test_strikethrough_and_code(self):
        assert md("<p><s>old</s> <code>x = 1</code></p>") == "~~old~~ `x = 1`"

    def test_edge_spaces_move_outside_delimiters(self):
        assert md("<p><strong>bold </strong>text</p>") == "**bold** text"

    def test_marks_stay_open_across_runs(self):
        assert md("<p><strong>a <em>b</em></strong></p>") == "**a *b***"

    def test_link(self):
        assert md('<p>see <a href="https://example.com">site</a></p>') == "see [site](https://example.com)"

    def test_bold_link(self):
        assert md('<p><a href="/x"><b>go</b></a></p>') == "[**go**](/x)"

    def test_link_with_spaces_in_destination(self):
        assert md('<p><a href="my file.pdf">doc</a></p>') == "[doc](<my file.pdf>)"

    def test_inline_math(self):
        assert md('<p><span class="math-inline" data-formula="x^2"></span></p>') == "$x^2$"

    def test_hard_break(self):
        assert md("<p>one<br>two</p>") == "one\\\ntwo"

    def test_hard_break_with_spaces(self):
        assert md("<p>one<br>two</p>", MarkdownOptions(hard_break="spaces")) == "one  \ntwo"


@pytest.mark.unit
class TestDelimiterRuns:
    """Tests for delimiters that touch each other or punctuation."""

    def test_closer_followed_by_opener_uses_underscores(self):
        assert md("<p><strong>a<em>b</em></strong><em>c</em></p>") == "**a*b***_c_"

    def test_italic_then_bold(self):
        assert md("<p><em>a</em><strong>b</strong></p>") == "*a*__b__"

    def test_opener_between_letter_and_punctuation(self):
        assert md("<p>a<strong>!b</strong></p>") == "&#x61;**!b**"

    def test_closer_between_punctuation_and_letter(self):
        assert md("<p><strong>b!</strong>c</p>") == "**b!**&#x63;"

    def test_intraword_emphasis_is_left_alone(self):
        assert md("<p>a<em>b</em>c</p>") == "a*b*c"

    def test_bang_before_link_is_escaped(self):
        assert md('<p>Wow!<a href="https://x.io">link</a></p>') == "Wow\\![link](https://x.io)"


@pytest.mark.unit
class TestEscaping:
    """Tests for escaping literal syntax."""

    def test_literal_asterisks(self):
        assert md("<p>2 * 3 * 4</p>") == "2 \\* 3 \\* 4"

    def test_line_start_list_marker(self):
        assert md("<p>1. not a list</p>") == "1\\. not a list"

    def test_heading_marker(self):
        assert md("<p># not a heading</p>") == "\\# not a heading"

    def test_list_marker_split_across_runs(self):
        assert md('<p><span style="color:red">1</span>. item</p>') == "1\\. item"

    def test_line_after_hard_break(self):
        assert md("<p>one<br># two</p>") == "one\\\n\\# two"

    def test_list_item_content(self):
        assert md("<ul><li>1. x</li></ul>") == "- 1\\. x"

    def test_trailing_hash_in_heading(self):
        assert md("<h2>C#</h2>") == "## C\\#"

    def test_escaping_can_be_disabled(self):
        assert md("<p>*raw*</p>", MarkdownOptions(escape_special=False)) == "*raw*"

    def test_code_is_not_escaped(self):
        assert md("<p><code>a*b</code></p>") == "`a*b`"


@pytest.mark.unit
class TestBlocks:
    """Tests for block syntax."""

    def test_headings(self):
        assert md("<h1>One</h1><h3>Three</h3>") == "# One\n\n### Three"

    def test_title(self):
        assert md("<p>x</p>", title="Notes") == "# Notes\n\nx"

    def test_title_can_be_omitted(self):
        assert md("<p>x</p>", MarkdownOptions(include_title=False), title="Notes") == "x"

    def test_unordered_list(self):
        assert md("<ul><li>one</li><li>two<ul><li>nested</li></ul></li></ul>") == "- one\n- two\n  - nested"

    def test_nested_ordered_numbering(self):
        html = "<ol><li>a</li><li>a<ol><li>b</li><li>b</li></ol></li><li>a</li></ol>"
        assert md(html) == "1. a\n2. a\n   1. b\n   2. b\n3. a"

    def test_custom_bullet(self):
        assert md("<ul><li>x</li></ul>", MarkdownOptions(bullet="*")) == "* x"

    def test_sibling_lists_alternate_bullets(self):
        html = "<ul><li>a</li></ul><ul><li>b</li></ul><ul><li>c</li></ul>"
        assert md(html) == "- a\n\n* b\n\n- c"

    def test_sibling_ordered_lists_alternate_delimiters(self):
        assert md("<ol><li>a</li></ol><ol><li>b</li><li>c</li></ol>") == "1. a\n\n1) b\n2) c"

    def test_alternate_for_star_bullet(self):
        assert md("<ul><li>a</li></ul><ul><li>b</li></ul>", MarkdownOptions(bullet="*")) == "* a\n\n- b"

    def test_nested_sibling_lists(self):
        html = "<ul><li>a<ul><li>b</li></ul><ul><li>c</li></ul></li></ul>"
        assert md(html) == "- a\n  - b\n  * c"

    def test_lists_separated_by_paragraph_keep_bullet(self):
        assert md("<ul><li>a</li></ul><p>x</p><ul><li>b</li></ul>") == "- a\n\nx\n\n- b"

    def test_blockquote(self):
        assert md("<blockquote><p>one</p><p>two</p></blockquote>") == "> one\n>\n> two"

    def test_code_block(self):
        assert md("<pre><code class='language-python'>print('hi')</code></pre>") == "```python\nprint('hi')\n```"

    def test_code_block_with_backticks(self):
        assert md("<pre>```\nx\n```</pre>") == "````\n```\nx\n```\n````"

    def test_image_with_caption(self):
        html = '<figure><img src="a.png" alt="Chart"><figcaption>Fig. 1</figcaption></figure>'
        assert md(html) == "![Chart](a.png)\n*Fig. 1*"

    def test_linked_image(self):
        assert md('<a href="https://example.com"><img src="a.png" alt="A"></a>') == "[![A](a.png)](https://example.com)"

    def test_horizontal_rule(self):
        assert md("<p>a</p><hr><p>b</p>") == "a\n\n---\n\nb"

    def test_math_block(self):
        assert md('<div class="math-block" data-formula="E=mc^2"></div>') == "$$\nE=mc^2\n$$"

    def test_unknown_container_is_transparent(self):
        assert md("<foo><p>x</p></foo>") == "x"


@pytest.mark.unit
class TestTables:
    """Tests for pipe tables."""

    def test_header_separator_and_rows(self):
        html = "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"
        assert md(html) == "| A | B |\n| --- | --- |\n| 1 | 2 |"

    def test_short_rows_are_padded(self):
        html = "<table><tr><td>a</td><td>b</td></tr><tr><td>c</td></tr></table>"
        output = md(html)
        assert output == "| a | b |\n| --- | --- |\n| c |  |"
        assert len({line.count("|") for line in output.splitlines()}) == 1

    def test_pipes_in_cells_are_escaped(self):
        html = "<table><tr><td>a | b</td></tr></table>"
        assert md(html).splitlines()[0] == "| a \\| b |"

    def test_caption(self):
        html = "<table><caption>Totals</caption><tr><td>1</td></tr></table>"
        assert md(html) == "*Totals*\n\n| 1 |\n| --- |"

    def test_empty_table_is_skipped(self):
        assert md("<p>x</p><table></table>") == "x"


@pytest.mark.unit
class TestLossyReporting:
    """Tests for styles Markdown cannot carry."""

    def test_color_span(self):
        result = render_markdown(to_document('<span style="color:#ff0000">red</span>'))
        assert result.content == "red"
        assert result.lossy
        assert result.lost_styles == frozenset({"color"})

    def test_underline_superscript_and_highlight(self):
        result = render_markdown(to_document("<p><u>u</u> x<sup>2</sup> <mark>m</mark></p>"))
        assert result.content == "u x2 m"
        assert result.lost_styles == frozenset({"underline", "superscript", "highlight"})

    def test_supported_marks_are_not_lossy(self):
        assert not render_markdown(to_document("<p><b>b</b> <i>i</i> <s>s</s> <code>c</code></p>")).lossy

    def test_result_string_conversion(self):
        doc = Document(blocks=[Paragraph(runs=[TextRun("x", StyleSet(color="#ff0000"))])])
        assert str(MarkdownRenderer().render(doc)) == "x"


@pytest.mark.unit
class TestOptions:
    """Tests for options validation."""

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            MarkdownRenderer(PlainTextOptions())  # type: ignore[arg-type]

    def test_invalid_bullet(self):
        with pytest.raises(ValueError):
            MarkdownOptions(bullet="#")

    def test_create_updated_revalidates(self):
        with pytest.raises(ValueError):
            MarkdownOptions().create_updated(hard_break="newline")
