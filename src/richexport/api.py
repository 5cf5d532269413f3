"""The major exported API functions for document export."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/richexport/api.py
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from richexport.ast.nodes import Document
from richexport.constants import (
    CONTENT_TYPE_DOCX,
    CONTENT_TYPE_HTML,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_MARKDOWN,
    CONTENT_TYPE_TEXT,
    TARGET_ALIASES,
)
from richexport.exceptions import EmptyInputError, RenderingError, RichExportError, UnsupportedTargetError
from richexport.options.base import BaseRendererOptions
from richexport.parsers.html import html_to_document
from richexport.renderers.base import BaseRenderer, RenderResult
from richexport.renderers.docobject import DocumentObjectRenderer, GenericDoc, render_document_object
from richexport.renderers.docx import DocxSerializer
from richexport.renderers.html import StyledHtmlRenderer, render_styled_html
from richexport.renderers.markdown import MarkdownRenderer, render_markdown
from richexport.renderers.plaintext import PlainTextRenderer, render_text
from richexport.utils.io_utils import atomic_write, sanitize_file_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportTarget:
    """One export format: how to render it and how to label the result.

    Parameters
    ----------
    name : str
        Canonical target name (``txt``, ``markdown``...)
    extension : str
        File extension without the dot
    content_type : str
        MIME type of the rendered output
    renderer_class : type of BaseRenderer
        Renderer instantiated with the caller's options for each export

    """

    name: str
    extension: str
    content_type: str
    renderer_class: type[BaseRenderer]

    @property
    def is_binary(self) -> bool:
        return not self.content_type.startswith("text/") and self.content_type != CONTENT_TYPE_JSON

    def render(
        self, doc: Document, options: Optional[BaseRendererOptions] = None
    ) -> tuple[Union[str, bytes], frozenset[str]]:
        """Render ``doc`` and return the output with the names of any dropped styles."""
        renderer = self.renderer_class(options)  # type: ignore[call-arg]
        output = renderer.render(doc)
        if isinstance(output, RenderResult):
            return output.content, output.lost_styles
        if isinstance(output, GenericDoc):
            return output.to_json(), frozenset()
        return output, frozenset()


EXPORT_TARGETS: dict[str, ExportTarget] = {
    target.name: target
    for target in (
        ExportTarget("txt", "txt", CONTENT_TYPE_TEXT, PlainTextRenderer),
        ExportTarget("markdown", "md", CONTENT_TYPE_MARKDOWN, MarkdownRenderer),
        ExportTarget("html", "html", CONTENT_TYPE_HTML, StyledHtmlRenderer),
        ExportTarget("docx", "docx", CONTENT_TYPE_DOCX, DocxSerializer),
        ExportTarget("json", "json", CONTENT_TYPE_JSON, DocumentObjectRenderer),
    )
}


def register_export_target(target: ExportTarget) -> None:
    """Add or replace an export target."""
    EXPORT_TARGETS[target.name] = target


def get_export_target(name: str) -> ExportTarget:
    """Look up an export target by name or alias.

    Raises
    ------
    UnsupportedTargetError
        If no target is registered under ``name``

    Examples
    --------
        >>> get_export_target("md").name
        'markdown'

    """
    key = (name or "").strip().lower()
    key = TARGET_ALIASES.get(key, key)
    try:
        return EXPORT_TARGETS[key]
    except KeyError:
        raise UnsupportedTargetError(name, supported_targets=sorted(EXPORT_TARGETS)) from None


@dataclass(frozen=True)
class ExportResult:
    """A finished export, ready to be sent or written.

    Parameters
    ----------
    content : str or bytes
        Rendered output; bytes for binary targets
    content_type : str
        MIME type of ``content``
    file_name : str
        Suggested file name including the extension
    lossy : bool
        True when some styling could not be represented
    lost_styles : frozenset of str
        Names of the dropped marks

    """

    content: Union[str, bytes]
    content_type: str
    file_name: str
    lossy: bool = False
    lost_styles: frozenset[str] = field(default_factory=frozenset)

    def to_bytes(self) -> bytes:
        """Return the content encoded as UTF-8 when it is text."""
        return self.content.encode("utf-8") if isinstance(self.content, str) else self.content

    def write(self, path: Union[str, Path]) -> Path:
        """Write the content atomically to ``path``; a directory receives ``file_name``."""
        destination = Path(path)
        if destination.is_dir():
            destination = destination / self.file_name
        return atomic_write(destination, self.to_bytes())


def to_document(html: str, title: Optional[str] = None) -> Document:
    """Parse editor HTML into a Document.

    Parameters
    ----------
    html : str
        HTML fragment or complete document
    title : str, optional
        Document title

    Returns
    -------
    Document
        The document model shared by every renderer

    """
    return html_to_document(html, title=title)


def export(
    content: Union[str, bytes],
    target: str,
    file_name: Optional[str] = None,
    title: Optional[str] = None,
    options: Optional[BaseRendererOptions] = None,
) -> ExportResult:
    """Convert editor HTML into one export format.

    Parameters
    ----------
    content : str or bytes
        Editor HTML. Bytes are decoded as UTF-8.
    target : str
        Target name or alias: ``txt``, ``markdown`` (``md``), ``html``,
        ``docx`` or ``json``
    file_name : str, optional
        Requested file name; sanitized, defaults to ``document``
    title : str, optional
        Document title
    options : BaseRendererOptions, optional
        Options for the target's renderer

    Returns
    -------
    ExportResult
        Rendered content with its content type, file name and lossy flag

    Raises
    ------
    UnsupportedTargetError
        If ``target`` is not a registered export target
    EmptyInputError
        If ``content`` is empty or whitespace only
    InvalidOptionsError
        If ``options`` do not belong to the target's renderer
    RenderingError
        If rendering fails (``SerializationError`` for DOCX output)

    Examples
    --------
        >>> result = export("<p><strong>Hi</strong></p>", "md", file_name="notes")
        >>> result.content, result.file_name
        ('**Hi**', 'notes.md')

    """
    export_target = get_export_target(target)

    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    if not content or not content.strip():
        raise EmptyInputError()

    logger.debug(f"Exporting {len(content)} characters of HTML to {export_target.name}")
    doc = to_document(content, title=title)

    try:
        rendered, lost_styles = export_target.render(doc, options)
    except RichExportError:
        raise
    except Exception as e:
        raise RenderingError(
            f"Failed to generate {export_target.name.upper()}: {e!r}", rendering_stage="rendering", original_error=e
        ) from e

    return ExportResult(
        content=rendered,
        content_type=export_target.content_type,
        file_name=f"{sanitize_file_name(file_name)}.{export_target.extension}",
        lossy=bool(lost_styles),
        lost_styles=lost_styles,
    )


__all__ = [
    "EXPORT_TARGETS",
    "ExportResult",
    "ExportTarget",
    "export",
    "get_export_target",
    "register_export_target",
    "render_document_object",
    "render_markdown",
    "render_styled_html",
    "render_text",
    "to_document",
]
