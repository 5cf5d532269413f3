#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/renderers/docx.py
"""DOCX serialization of the generic document object.

This module provides the DocxSerializer class which writes a GenericDoc to
Microsoft Word (.docx) format using the python-docx library. Documents are
always built in memory; writing to disk goes through an atomic replace, so
a failed export never leaves a partial file behind.

Remote images are never fetched. Images given as ``data:`` URIs are
embedded; every other image is written as its alt text and URL.

"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from docx.table import _Cell
    from docx.text.paragraph import Paragraph

from richexport.ast.nodes import Document
from richexport.exceptions import RenderingError, SerializationError
from richexport.options.docx import DocxOptions
from richexport.renderers.base import BaseRenderer
from richexport.renderers.docobject import (
    DocImage,
    DocParagraph,
    DocRule,
    DocRun,
    DocTable,
    DocumentObjectRenderer,
    GenericDoc,
)
from richexport.utils.images import EMBEDDABLE_FORMATS, decode_base64_image, is_data_uri
from richexport.utils.io_utils import atomic_write

logger = logging.getLogger(__name__)

_HYPERLINK_RELATIONSHIP = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink"


class DocxSerializer(BaseRenderer):
    """Serialize a GenericDoc (or a Document) to DOCX bytes.

    Parameters
    ----------
    options : DocxOptions or None, default = None
        DOCX formatting options
    document_renderer : DocumentObjectRenderer or None, default = None
        Renderer used when a Document rather than a GenericDoc is given

    Examples
    --------
        >>> from richexport.parsers.html import html_to_document
        >>> data = DocxSerializer().render(html_to_document("<h1>Report</h1><p>Body</p>"))
        >>> data[:2]
        b'PK'

    """

    def __init__(
        self, options: DocxOptions | None = None, document_renderer: DocumentObjectRenderer | None = None
    ):
        """Initialize the DOCX serializer with options."""
        BaseRenderer._validate_options_type(options, DocxOptions, "docx")
        options = options or DocxOptions()
        BaseRenderer.__init__(self, options)
        self.options: DocxOptions = options
        self._document_renderer = document_renderer or DocumentObjectRenderer()
        self.document: Any = None  # Word document (python-docx Document object)

    def render(self, doc: Union[Document, GenericDoc]) -> bytes:
        """Serialize ``doc`` to DOCX bytes.

        Parameters
        ----------
        doc : Document or GenericDoc
            The document to serialize. A Document is first rendered to a
            GenericDoc.

        Returns
        -------
        bytes
            The DOCX file content

        Raises
        ------
        SerializationError
            If the DOCX package cannot be produced

        """
        from docx import Document as WordDocument
        from docx.enum.text import WD_ALIGN_PARAGRAPH
        from docx.oxml import OxmlElement
        from docx.oxml.ns import qn
        from docx.shared import Inches, Pt, RGBColor, Twips

        # Store imports as instance variables for use in other methods
        self._WD_ALIGN_PARAGRAPH = WD_ALIGN_PARAGRAPH
        self._OxmlElement = OxmlElement
        self._qn = qn
        self._Inches = Inches
        self._Pt = Pt
        self._RGBColor = RGBColor
        self._Twips = Twips

        generic = doc if isinstance(doc, GenericDoc) else self._document_renderer.render(doc)

        try:
            self.document = WordDocument()
            self._set_document_defaults()
            self._set_document_properties(generic)
            for element in generic.elements:
                self._write_element(element)

            buffer = BytesIO()
            self.document.save(buffer)
            return buffer.getvalue()
        except SerializationError:
            raise
        except RenderingError as e:
            raise SerializationError(str(e), target="docx", original_error=e) from e
        except Exception as e:
            raise SerializationError(f"Failed to render DOCX: {e!r}", target="docx", original_error=e) from e
        finally:
            self.document = None

    def render_to_bytes(self, doc: Union[Document, GenericDoc]) -> bytes:  # type: ignore[override]
        """Serialize ``doc`` to DOCX bytes."""
        return self.render(doc)

    def render_to_file(self, doc: Union[Document, GenericDoc], path: Union[str, Path]) -> Path:  # type: ignore[override]
        """Serialize ``doc`` and write it atomically to ``path``.

        Raises
        ------
        SerializationError
            If serialization or the write fails; ``path`` is left untouched

        """
        data = self.render(doc)
        try:
            return atomic_write(path, data)
        except OSError as e:
            raise SerializationError(
                f"Failed to write DOCX: {e}", target="docx", file_path=str(path), original_error=e
            ) from e

    # ------------------------------------------------------------------
    # Document setup
    # ------------------------------------------------------------------

    def _set_document_defaults(self) -> None:
        """Set default document styles and formatting."""
        style = self.document.styles["Normal"]
        font = style.font
        font.name = self.options.default_font
        font.size = self._Pt(self.options.default_font_size)

    def _set_document_properties(self, generic: GenericDoc) -> None:
        core_props = self.document.core_properties
        if generic.title:
            core_props.title = generic.title
        if generic.description:
            core_props.comments = generic.description

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def _write_element(self, element: Any) -> None:
        if isinstance(element, DocParagraph):
            self._write_paragraph(element)
        elif isinstance(element, DocTable):
            self._write_table(element)
        elif isinstance(element, DocImage):
            self._write_image(element)
        elif isinstance(element, DocRule):
            self._write_rule()
        else:
            logger.debug(f"Skipping unknown document element {type(element).__name__}")

    def _write_paragraph(self, element: DocParagraph) -> None:
        if element.kind == "title":
            para = self.document.add_heading(level=0)
        elif element.kind == "heading":
            # Word supports levels 1-9
            para = self.document.add_heading(level=min(9, max(1, element.level)))
        else:
            para = self.document.add_paragraph()

        # Raw pPr children go in before python-docx inserts its own in schema order
        if element.border_left is not None:
            self._set_paragraph_left_border(para, element.border_left.color, element.border_left.size)
        if element.shading:
            self._set_paragraph_shading(para, element.shading)

        fmt = para.paragraph_format
        fmt.space_before = self._Twips(element.spacing_before)
        fmt.space_after = self._Twips(element.spacing_after)
        if element.indent_left:
            fmt.left_indent = self._Twips(element.indent_left)
        if element.indent_hanging:
            fmt.first_line_indent = self._Twips(-element.indent_hanging)
        if element.alignment:
            fmt.alignment = self._alignment(element.alignment)

        if element.numbering is not None:
            para.add_run(f"{element.numbering.marker}\t")

        if element.kind == "code":
            self._add_runs(para, element.runs, font_size=self._Pt(self.options.code_font_size))
        else:
            self._add_runs(para, element.runs)

    def _alignment(self, alignment: str) -> Any:
        return {
            "left": self._WD_ALIGN_PARAGRAPH.LEFT,
            "center": self._WD_ALIGN_PARAGRAPH.CENTER,
            "right": self._WD_ALIGN_PARAGRAPH.RIGHT,
            "justify": self._WD_ALIGN_PARAGRAPH.JUSTIFY,
        }[alignment]

    def _write_table(self, element: DocTable) -> None:
        if element.caption:
            caption = self.document.add_paragraph()
            caption.add_run(element.caption).italic = True

        columns = max(element.column_count, 1)
        table = self.document.add_table(rows=len(element.rows), cols=columns)
        table.style = "Table Grid"

        # Spans are not expanded; short rows leave their trailing cells empty
        for row_idx, row in enumerate(element.rows):
            for col_idx, cell in enumerate(row[:columns]):
                docx_cell = table.rows[row_idx].cells[col_idx]
                paragraph = docx_cell.paragraphs[0]
                self._add_runs(paragraph, cell.runs)
                if cell.shading:
                    self._set_cell_shading(docx_cell, cell.shading)

    def _write_image(self, element: DocImage) -> None:
        if is_data_uri(element.src):
            if self.options.embed_data_images and self._embed_image(element):
                return
            para = self.document.add_paragraph(element.alt or "[image]")
        else:
            para = self.document.add_paragraph()
            if element.alt:
                para.add_run(f"{element.alt} ")
            para.add_run("(")
            self._add_hyperlink(para, element.src, element.src)
            para.add_run(")")

        if element.indent_left:
            para.paragraph_format.left_indent = self._Twips(element.indent_left)
        self._write_image_caption(element)

    def _embed_image(self, element: DocImage) -> bool:
        """Embed a data URI image; returns False when the text fallback should be used."""
        data, image_format = decode_base64_image(element.src)
        try:
            if data is None or image_format not in EMBEDDABLE_FORMATS:
                raise ValueError(f"cannot embed image data of format {image_format!r}")
            para = self.document.add_paragraph()
            para.add_run().add_picture(BytesIO(data), width=self._Inches(4))
        except Exception as e:
            logger.warning(f"Failed to add image to DOCX: {e}")
            if self.options.fail_on_resource_errors:
                raise RenderingError(
                    f"Failed to add image to DOCX: {e!r}", rendering_stage="image_processing", original_error=e
                ) from e
            return False

        if element.indent_left:
            para.paragraph_format.left_indent = self._Twips(element.indent_left)
        self._write_image_caption(element)
        return True

    def _write_image_caption(self, element: DocImage) -> None:
        if not element.caption:
            return
        caption_para = self.document.add_paragraph()
        caption_para.alignment = self._WD_ALIGN_PARAGRAPH.CENTER
        caption_para.add_run(element.caption).italic = True

    def _write_rule(self) -> None:
        # Horizontal line as a light gray text separator
        para = self.document.add_paragraph()
        run = para.add_run("─" * 78)
        run.font.color.rgb = self._RGBColor(192, 192, 192)

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def _add_runs(self, paragraph: Paragraph, runs: tuple[DocRun, ...], font_size: Any = None) -> None:
        """Append formatted runs to a paragraph."""
        for doc_run in runs:
            if doc_run.is_break:
                paragraph.add_run().add_break()
                continue
            run = paragraph.add_run(doc_run.text)
            self._format_run(run, doc_run, font_size)
            if doc_run.link:
                self._wrap_in_hyperlink(paragraph, run, doc_run.link)

    def _format_run(self, run: Any, doc_run: DocRun, font_size: Any = None) -> None:
        if doc_run.highlight:
            shading_elm = self._OxmlElement("w:shd")
            shading_elm.set(self._qn("w:val"), "clear")
            shading_elm.set(self._qn("w:fill"), doc_run.highlight)
            run._element.get_or_add_rPr().append(shading_elm)
        if doc_run.bold:
            run.bold = True
        if doc_run.italic:
            run.italic = True
        if doc_run.underline:
            run.underline = True
        if doc_run.strikethrough:
            run.font.strike = True
        if doc_run.superscript:
            run.font.superscript = True
        if doc_run.subscript:
            run.font.subscript = True
        if doc_run.font:
            run.font.name = doc_run.font
            run.font.size = self._Pt(self.options.code_font_size)
        if font_size is not None:
            run.font.size = font_size
        if doc_run.color:
            run.font.color.rgb = self._RGBColor.from_string(doc_run.color)

    def _wrap_in_hyperlink(self, paragraph: Paragraph, run: Any, url: str) -> None:
        """Move an already formatted run into a hyperlink element.

        python-docx has no high-level hyperlink API, so the relationship and
        the ``w:hyperlink`` element are built directly.
        """
        r_id = paragraph.part.relate_to(url, _HYPERLINK_RELATIONSHIP, is_external=True)
        hyperlink = self._OxmlElement("w:hyperlink")
        hyperlink.set(self._qn("r:id"), r_id)

        r_style = self._OxmlElement("w:rStyle")
        r_style.set(self._qn("w:val"), "Hyperlink")
        run._element.get_or_add_rPr().insert(0, r_style)
        if not run.font.color.rgb:
            run.font.color.rgb = self._RGBColor(0x05, 0x63, 0xC1)
        run.underline = True

        # Appending moves the run element out of the paragraph
        hyperlink.append(run._element)
        paragraph._element.append(hyperlink)

    def _add_hyperlink(self, paragraph: Paragraph, url: str, text: str) -> None:
        """Add a hyperlink with plain link styling to a paragraph."""
        run = paragraph.add_run(text)
        self._wrap_in_hyperlink(paragraph, run, url)

    # ------------------------------------------------------------------
    # OOXML helpers
    # ------------------------------------------------------------------

    def _set_paragraph_shading(self, paragraph: Paragraph, color: str) -> None:
        """Set paragraph background color.

        Parameters
        ----------
        paragraph : Paragraph
            Paragraph to shade
        color : str
            Hex color code (e.g., "F5F5F5")

        """
        shading_elm = self._OxmlElement("w:shd")
        shading_elm.set(self._qn("w:val"), "clear")
        shading_elm.set(self._qn("w:fill"), color)
        paragraph._element.get_or_add_pPr().append(shading_elm)

    def _set_paragraph_left_border(self, paragraph: Paragraph, color: str, size: int) -> None:
        border = self._OxmlElement("w:pBdr")
        left = self._OxmlElement("w:left")
        left.set(self._qn("w:val"), "single")
        left.set(self._qn("w:sz"), str(size))
        left.set(self._qn("w:space"), "4")
        left.set(self._qn("w:color"), color)
        border.append(left)
        paragraph._element.get_or_add_pPr().append(border)

    def _set_cell_shading(self, cell: _Cell, color: str) -> None:
        shading_elm = self._OxmlElement("w:shd")
        shading_elm.set(self._qn("w:val"), "clear")
        shading_elm.set(self._qn("w:fill"), color)
        cell._tc.get_or_add_tcPr().append(shading_elm)


def render_docx(doc: Union[Document, GenericDoc], options: DocxOptions | None = None) -> bytes:
    """Serialize ``doc`` to DOCX bytes."""
    return DocxSerializer(options).render(doc)
