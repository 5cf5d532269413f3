#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_docx_serializer.py
"""Unit tests for DocxSerializer.

Tests cover:
- Paragraph, heading and list output
- Character formatting and hyperlinks
- Tables, images and rules
- Failure handling

Every test re-opens the produced bytes with python-docx.

"""

from io import BytesIO

import pytest
from docx import Document as DocxDocument
from docx.shared import RGBColor

from richexport.api import to_document
from richexport.exceptions import InvalidOptionsError, SerializationError
from richexport.options import DocxOptions, MarkdownOptions
from richexport.renderers.docobject import DocParagraph, DocRun, GenericDoc
from richexport.renderers.docx import DocxSerializer, render_docx

# 1x1 transparent PNG
PNG_DATA_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def reopen(html, options=None, **kwargs):
    data = render_docx(to_document(html, **kwargs), options)
    return DocxDocument(BytesIO(data))


def texts(document):
    return [p.text for p in document.paragraphs if p.text.strip()]


@pytest.mark.unit
@pytest.mark.docx
class TestBasicOutput:
    """Tests for document-level output."""

    def test_output_is_zip_package(self):
        data = DocxSerializer().render(to_document("<p>x</p>"))
        assert data[:2] == b"PK"

    def test_paragraph_text(self):
        document = reopen("<p>Hello world</p><p>Second</p>")
        assert texts(document) == ["Hello world", "Second"]

    def test_title_and_properties(self):
        document = reopen("<p>x</p>", title="Quarterly Report")
        assert document.paragraphs[0].text == "Quarterly Report"
        assert document.paragraphs[0].style.name == "Title"
        assert document.core_properties.title == "Quarterly Report"
        assert document.core_properties.comments == "Exported from richexport"

    def test_heading_styles(self):
        document = reopen("<h1>One</h1><h3>Three</h3>")
        assert [p.style.name for p in document.paragraphs] == ["Heading 1", "Heading 3"]

    def test_default_font(self):
        document = reopen("<p>x</p>", DocxOptions(default_font="Arial", default_font_size=12))
        font = document.styles["Normal"].font
        assert font.name == "Arial"
        assert font.size.pt == 12

    def test_generic_doc_input(self):
        generic = GenericDoc(elements=(DocParagraph(kind="paragraph", runs=(DocRun(text="direct"),)),))
        document = DocxDocument(BytesIO(DocxSerializer().render(generic)))
        assert texts(document) == ["direct"]


@pytest.mark.unit
@pytest.mark.docx
class TestFormatting:
    """Tests for character formatting."""

    def test_marks(self):
        document = reopen("<p><b>b</b><i>i</i><u>u</u><s>s</s><sup>p</sup></p>")
        runs = {run.text: run for run in document.paragraphs[0].runs}
        assert runs["b"].bold
        assert runs["i"].italic
        assert runs["u"].underline
        assert runs["s"].font.strike
        assert runs["p"].font.superscript

    def test_color(self):
        document = reopen('<p><span style="color:#ff0000">red</span></p>')
        assert document.paragraphs[0].runs[0].font.color.rgb == RGBColor(0xFF, 0x00, 0x00)

    def test_highlight_shading(self):
        document = reopen("<p><mark>hot</mark></p>")
        assert 'w:fill="FFFF00"' in document.paragraphs[0].runs[0]._element.xml

    def test_inline_code_font(self):
        document = reopen("<p><code>x</code></p>")
        run = document.paragraphs[0].runs[0]
        assert run.font.name == "Courier New"
        assert run.font.size.pt == 10

    def test_line_break(self):
        document = reopen("<p>one<br>two</p>")
        assert document.paragraphs[0].text == "one\ntwo"

    def test_hyperlink(self):
        document = reopen('<p>see <a href="https://example.com">site</a></p>')
        assert document.paragraphs[0].text == "see site"
        targets = [rel.target_ref for rel in document.part.rels.values() if rel.is_external]
        assert targets == ["https://example.com"]


@pytest.mark.unit
@pytest.mark.docx
class TestBlocks:
    """Tests for lists, quotes, code, tables, images and rules."""

    def test_list_markers(self):
        document = reopen("<ol><li>a</li><li>b<ul><li>c</li></ul></li></ol>")
        assert texts(document) == ["1.\ta", "2.\tb", "•\tc"]
        nested = document.paragraphs[2].paragraph_format
        assert nested.left_indent.twips == 1440
        assert nested.first_line_indent.twips == -360

    def test_quote_border(self):
        document = reopen("<blockquote><p>quoted</p></blockquote>")
        xml = document.paragraphs[0]._element.xml
        assert "w:pBdr" in xml
        assert 'w:color="CCCCCC"' in xml

    def test_code_block_shading(self):
        document = reopen("<pre>a = 1\nb = 2</pre>")
        paragraph = document.paragraphs[0]
        assert paragraph.text == "a = 1\nb = 2"
        assert 'w:fill="F5F5F5"' in paragraph._element.xml

    def test_table(self):
        document = reopen("<table><tr><th>A</th><th>B</th></tr><tr><td>1</td></tr></table>")
        table = document.tables[0]
        assert len(table.rows) == 2
        assert len(table.columns) == 2
        assert [cell.text for cell in table.rows[0].cells] == ["A", "B"]
        assert [cell.text for cell in table.rows[1].cells] == ["1", ""]
        assert 'w:fill="EEEEEE"' in table.rows[0].cells[0]._tc.xml
        assert table.rows[0].cells[0].paragraphs[0].runs[0].bold

    def test_table_caption(self):
        document = reopen("<table><caption>Totals</caption><tr><td>1</td></tr></table>")
        assert document.paragraphs[0].text == "Totals"
        assert document.paragraphs[0].runs[0].italic

    def test_embedded_image(self):
        document = reopen(f'<figure><img src="{PNG_DATA_URI}" alt="dot"><figcaption>Cap</figcaption></figure>')
        assert len(document.inline_shapes) == 1
        assert "Cap" in texts(document)

    def test_image_embedding_can_be_disabled(self):
        document = reopen(f'<img src="{PNG_DATA_URI}" alt="dot">', DocxOptions(embed_data_images=False))
        assert len(document.inline_shapes) == 0
        assert texts(document) == ["dot"]

    def test_broken_image_falls_back_to_alt(self):
        document = reopen('<img src="data:image/png;base64,AAAA" alt="broken">')
        assert texts(document) == ["broken"]

    def test_broken_image_can_fail(self):
        doc = to_document('<img src="data:image/png;base64,AAAA" alt="broken">')
        with pytest.raises(SerializationError):
            DocxSerializer(DocxOptions(fail_on_resource_errors=True)).render(doc)

    def test_remote_image_is_linked_not_fetched(self):
        document = reopen('<img src="https://example.com/a.png" alt="Logo">')
        assert texts(document) == ["Logo (https://example.com/a.png)"]

    def test_rule(self):
        document = reopen("<hr>")
        assert document.paragraphs[0].text == "─" * 78


@pytest.mark.unit
@pytest.mark.docx
class TestFailures:
    """Tests for error handling."""

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            DocxSerializer(MarkdownOptions())  # type: ignore[arg-type]

    def test_invalid_element_is_wrapped(self):
        generic = GenericDoc(elements=(DocParagraph(kind="paragraph", runs=(DocRun(text="x"),), alignment="bogus"),))
        with pytest.raises(SerializationError) as exc_info:
            DocxSerializer().render(generic)
        assert exc_info.value.target == "docx"

    def test_render_to_file(self, tmp_path):
        path = DocxSerializer().render_to_file(to_document("<p>saved</p>"), tmp_path / "out.docx")
        assert texts(DocxDocument(str(path))) == ["saved"]

    def test_render_to_missing_directory(self, tmp_path):
        with pytest.raises(SerializationError) as exc_info:
            DocxSerializer().render_to_file(to_document("<p>x</p>"), tmp_path / "missing" / "out.docx")
        assert exc_info.value.file_path is not None

    def test_invalid_font_size(self):
        with pytest.raises(ValueError):
            DocxOptions(code_font_size=0)
