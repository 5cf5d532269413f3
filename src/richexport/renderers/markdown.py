#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/renderers/markdown.py
"""Markdown rendering from the document model.

This module provides the MarkdownRenderer class which converts documents to
CommonMark with the GFM strikethrough and pipe-table extensions.

Inline marks are written as delimiters that nest in a fixed order: a link
is outermost, then bold, italic and strikethrough, with code spans
innermost. Marks that span several runs stay open across them, and spaces
at a run edge are moved outside the delimiters so that they remain valid
emphasis when parsed again. Where a closing delimiter would run into an
opening one of the same character the opener is written with underscores,
and a letter pressed against a delimiter run is written as a character
reference when the run could not otherwise open or close.

Adjacent lists at the same depth alternate their bullet (``-``/``*``) or
number delimiter (``.``/``)``) so that they are read back as separate lists.

Styling Markdown cannot express (color, highlight, underline, superscript,
subscript) is dropped; the text is kept and the result is flagged lossy.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from richexport.ast.nodes import (
    Blockquote,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    Image,
    ListItem,
    MathBlock,
    Paragraph,
    RawContainer,
    StyleSet,
    Table,
    TextRun,
)
from richexport.ast.visitors import BlockVisitor
from richexport.options.markdown import MarkdownOptions
from richexport.renderers.base import (
    BaseRenderer,
    LossTracker,
    RenderResult,
    finalize_text,
    join_blocks,
    merge_runs,
)
from richexport.utils.escape import (
    escape_inline_code,
    escape_line_start,
    escape_markdown,
    fence_for,
    markdown_url,
)

logger = logging.getLogger(__name__)

_DELIMITERS = {"bold": "**", "italic": "*", "strikethrough": "~~"}

# (mark, href) pairs; href is only set for links
_Wrapper = tuple[str, Optional[str]]


def _wrappers(style: StyleSet) -> list[_Wrapper]:
    """Delimited marks of ``style`` in nesting order, outermost first."""
    wrappers: list[_Wrapper] = []
    if style.link:
        wrappers.append(("link", style.link))
    for mark in ("bold", "italic", "strikethrough"):
        if getattr(style, mark):
            wrappers.append((mark, None))
    return wrappers


@dataclass
class _Span:
    """An open inline mark; both of its delimiters share it."""

    mark: str
    href: Optional[str] = None
    underscore: bool = False

    @property
    def wrapper(self) -> _Wrapper:
        return (self.mark, self.href)


@dataclass
class _Delimiter:
    span: _Span
    closing: bool = False

    @property
    def text(self) -> str:
        if self.span.mark == "link":
            return f"]({markdown_url(self.span.href or '')})" if self.closing else "["
        delimiter = _DELIMITERS[self.span.mark]
        return delimiter.replace("*", "_") if self.span.underscore else delimiter

    @property
    def is_emphasis(self) -> bool:
        return self.span.mark in ("bold", "italic")


_Piece = Union[str, _Delimiter]


def _piece_text(piece: _Piece) -> str:
    return piece if isinstance(piece, str) else piece.text


def _is_punctuation(char: str) -> bool:
    return not char.isspace() and not char.isalnum()


def _char_reference(char: str) -> str:
    return f"&#x{ord(char):X};"


def _use_underscores(pieces: list[_Piece]) -> None:
    """Switch an opener that directly follows a closer of the same character to underscores.

    ``**a*b****c*`` cannot be parsed back into two spans because the closing
    and opening asterisks merge into one run; ``**a*b***_c_`` can.
    """
    for previous, current in zip(pieces, pieces[1:]):
        if (
            isinstance(previous, _Delimiter)
            and isinstance(current, _Delimiter)
            and previous.closing
            and not current.closing
            and previous.text.endswith("*")
            and current.text.startswith("*")
        ):
            current.span.underscore = True


def _encode_last(text: str) -> str:
    """Write the last character of ``text`` as a character reference."""
    body = text[:-1]
    # An intraword underscore starts flanking once its neighbor is a reference
    if body.endswith("_") and body[-2:-1].isalnum():
        body = body[:-1] + "\\_"
    return body + _char_reference(text[-1])


def _encode_first(text: str) -> str:
    """Write the first character of ``text`` as a character reference."""
    rest = text[1:]
    if rest.startswith("_") and rest[1:2].isalnum():
        rest = "\\_" + rest[1:]
    return _char_reference(text[0]) + rest


def _repair_flanking(pieces: list[_Piece]) -> None:
    """Make every emphasis delimiter run able to open or close where it stands.

    An opener squeezed between a letter and punctuation (``a**!b**``) is not
    left-flanking, and a closer squeezed between punctuation and a letter is
    not right-flanking. Writing the letter as a character reference puts
    punctuation on that side, which restores the run without changing the
    text.
    """
    index = 0
    while index < len(pieces):
        piece = pieces[index]
        if not isinstance(piece, _Delimiter) or not piece.is_emphasis:
            index += 1
            continue
        char = piece.text[0]
        end = index
        while end + 1 < len(pieces):
            following = pieces[end + 1]
            if not isinstance(following, _Delimiter) or not following.is_emphasis or following.text[0] != char:
                break
            end += 1

        previous = pieces[index - 1] if index > 0 else "\n"
        following = pieces[end + 1] if end + 1 < len(pieces) else "\n"
        before = _piece_text(previous)[-1]
        after = _piece_text(following)[0]
        if piece.closing:
            if isinstance(following, str) and after.isalnum() and (_is_punctuation(before) or char == "_"):
                pieces[end + 1] = _encode_first(following)
        elif isinstance(previous, str) and before.isalnum() and (_is_punctuation(after) or char == "_"):
            pieces[index - 1] = _encode_last(previous)
        index = end + 1


class MarkdownRenderer(BlockVisitor, LossTracker, BaseRenderer):
    """Render documents to Markdown text.

    Parameters
    ----------
    options : MarkdownOptions or None, default = None
        Markdown formatting options

    Examples
    --------
        >>> from richexport.parsers.html import html_to_document
        >>> doc = html_to_document("<p><strong>bold</strong> and <em>italic</em></p>")
        >>> MarkdownRenderer().render_to_string(doc)
        '**bold** and *italic*'

    """

    _unsupported_marks = frozenset({"color", "highlight", "underline", "superscript", "subscript"})

    def __init__(self, options: MarkdownOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownOptions, "markdown")
        options = options or MarkdownOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownOptions = options
        self._chunks: list[tuple[str, bool, bool]] = []
        self._lost_styles: set[str] = set()
        # Per-depth list state: alternate delimiters and the content column of the last item
        self._alternate: dict[int, bool] = {}
        self._columns: dict[int, int] = {}
        self._item_depth = 0

    @property
    def _hard_break(self) -> str:
        return "  \n" if self.options.hard_break == "spaces" else "\\\n"

    def render(self, doc: Document) -> RenderResult:
        """Render ``doc`` to Markdown.

        Parameters
        ----------
        doc : Document
            The document to render

        Returns
        -------
        RenderResult
            Markdown text; ``lossy`` is set when styling was dropped

        """
        self._chunks = []
        self._lost_styles = set()
        self._alternate = {}
        self._columns = {}
        doc.accept(self)
        content = finalize_text(join_blocks(self._chunks))
        lost = frozenset(self._lost_styles)
        if lost:
            logger.info("Markdown output dropped unsupported styles: %s", ", ".join(sorted(lost)))
        return RenderResult(content=content, lossy=bool(lost), lost_styles=lost)

    def render_to_string(self, doc: Document) -> str:
        """Render a document to a Markdown string."""
        return self.render(doc).content

    def _emit(self, text: str) -> None:
        if text.strip():
            self._chunks.append((text, False, False))
            self._columns.clear()

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def _render_runs(self, runs: tuple[TextRun, ...], context: str = "text", break_text: str | None = None) -> str:
        """Render runs to inline Markdown.

        Parameters
        ----------
        runs : sequence of TextRun
            Inline content
        context : {"text", "table"}
            Escaping context
        break_text : str, optional
            Replacement for line-break runs; defaults to the configured hard break

        """
        if break_text is None:
            break_text = self._hard_break
        escape = self.options.escape_special

        pieces: list[_Piece] = []
        stack: list[_Span] = []
        pending_space = ""
        at_line_start = True

        def close_to(depth: int) -> None:
            while len(stack) > depth:
                pieces.append(_Delimiter(stack.pop(), closing=True))

        for run in merge_runs(runs):
            if run.is_break:
                close_to(0)
                pieces.append(break_text)
                pending_space = ""
                at_line_start = "\n" in break_text
                continue

            self._record_losses(run.style)
            text = run.text.replace("\n", " ") if run.style.code or run.style.math else run.text
            core = text.strip(" ")
            if not core:
                pending_space += text
                continue
            lead = text[: len(text) - len(text.lstrip(" "))]
            trail = text[len(text.rstrip(" ")) :]

            desired = _wrappers(run.style)
            keep = 0
            while keep < len(stack) and stack[keep].wrapper in desired:
                keep += 1
            close_to(keep)

            spacing = pending_space + lead
            if spacing and not at_line_start:
                pieces.append(spacing)

            open_wrappers = [span.wrapper for span in stack]
            for mark, href in desired:
                if (mark, href) in open_wrappers:
                    continue
                span = _Span(mark, href)
                if mark == "link" and escape and pieces and isinstance(pieces[-1], str) and pieces[-1].endswith("!"):
                    # "![" would start an image
                    pieces[-1] = pieces[-1][:-1] + "\\!"
                stack.append(span)
                pieces.append(_Delimiter(span))

            pieces.append(self._format_text(core, run.style, context))
            at_line_start = False
            pending_space = trail

        close_to(0)
        _use_underscores(pieces)
        if escape:
            _repair_flanking(pieces)
        return "".join(_piece_text(piece) for piece in pieces)

    def _format_text(self, text: str, style: StyleSet, context: str) -> str:
        if style.math:
            return f"${text}$"
        if style.code:
            return escape_inline_code(text)
        if not self.options.escape_special:
            return text
        return escape_markdown(text, context)

    def _escape_line_starts(self, text: str) -> str:
        """Escape block syntax at the start of every line of rendered inline content."""
        if not self.options.escape_special:
            return text
        lines = []
        for line in text.split("\n"):
            body = line.lstrip(" ")
            lines.append(line[: len(line) - len(body)] + escape_line_start(body))
        return "\n".join(lines)

    def _escape_plain(self, text: str) -> str:
        if not self.options.escape_special:
            return text
        return escape_line_start(escape_markdown(text))

    # ------------------------------------------------------------------
    # Visitor methods
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        if node.title and self.options.include_title:
            self._emit(f"# {self._escape_plain(node.title)}")
        self.visit_blocks(node.blocks)

    def visit_heading(self, node: Heading) -> None:
        content = self._render_runs(node.runs, break_text=" ")
        if not content.strip():
            return
        if self.options.escape_special and content.endswith("#"):
            # Trailing hashes would be read as a closing sequence
            content = content[:-1] + "\\#"
        self._emit(f"{'#' * node.level} {content}")

    def visit_paragraph(self, node: Paragraph) -> None:
        self._emit(self._escape_line_starts(self._render_runs(node.runs)))

    def visit_list_item(self, node: ListItem) -> None:
        if node.list_start:
            # A list directly after another one at the same depth switches
            # delimiters, otherwise the two would be read back as one list
            follows_item = bool(self._chunks) and self._chunks[-1][1] and self._item_depth >= node.depth
            self._alternate[node.depth] = follows_item and not self._alternate.get(node.depth, False)
        alternate = self._alternate.get(node.depth, False)
        if node.ordered:
            marker = f"{node.index}{')' if alternate else '.'} "
        else:
            marker = f"{self._bullet(alternate)} "

        # Nested items start at the content column of their parent
        width = self._columns.get(node.depth - 1, 2 * node.depth) if node.depth else 0
        for depth in [depth for depth in self._columns if depth >= node.depth]:
            del self._columns[depth]
        self._columns[node.depth] = width + len(marker)
        self._item_depth = node.depth

        indent = " " * width
        continuation = self._hard_break + " " * (width + len(marker))
        content = self._escape_line_starts(self._render_runs(node.runs, break_text=continuation))
        starts_list = node.list_start and node.depth == 0
        self._chunks.append((f"{indent}{marker}{content}".rstrip(), True, starts_list))

    def _bullet(self, alternate: bool) -> str:
        if not alternate:
            return self.options.bullet
        return "-" if self.options.bullet == "*" else "*"

    def visit_blockquote(self, node: Blockquote) -> None:
        saved = self._chunks
        self._chunks = []
        self.visit_blocks(node.children)
        inner = join_blocks(self._chunks)
        self._chunks = saved
        if not inner.strip():
            return
        self._emit("\n".join(f"> {line}" if line.strip() else ">" for line in inner.split("\n")))

    def visit_code_block(self, node: CodeBlock) -> None:
        fence = fence_for(node.text)
        language = node.language or ""
        body = node.text if node.text.endswith("\n") or not node.text else node.text + "\n"
        self._emit(f"{fence}{language}\n{body}{fence}")

    def visit_table(self, node: Table) -> None:
        grid = node.grid
        columns = grid.column_count
        if columns == 0:
            return

        rendered: list[list[str]] = []
        for row in grid.rows:
            cells = [self._render_runs(cell.runs, context="table", break_text=" ").strip() for cell in row.cells]
            # Markdown tables need a cell for every column
            cells.extend([""] * (columns - len(cells)))
            rendered.append(cells)

        lines = [self._table_line(rendered[0]), self._table_line(["---"] * columns)]
        lines.extend(self._table_line(cells) for cells in rendered[1:])

        if grid.caption:
            self._emit(f"*{escape_markdown(grid.caption)}*")
        self._emit("\n".join(lines))

    @staticmethod
    def _table_line(cells: list[str]) -> str:
        return "| " + " | ".join(cells) + " |"

    def visit_image(self, node: Image) -> None:
        alt = node.alt.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
        target = markdown_url(node.src)
        if node.title:
            title = node.title.replace('"', '\\"')
            target = f'{target} "{title}"'
        image = f"![{alt}]({target})"
        if node.href:
            image = f"[{image}]({markdown_url(node.href)})"
        if node.caption:
            image = f"{image}\n*{escape_markdown(node.caption)}*"
        self._emit(image)

    def visit_horizontal_rule(self, node: HorizontalRule) -> None:
        self._emit("---")

    def visit_raw_container(self, node: RawContainer) -> None:
        self.visit_blocks(node.children)

    def visit_math_block(self, node: MathBlock) -> None:
        self._emit(f"$$\n{node.formula}\n$$")


def render_markdown(doc: Document, options: MarkdownOptions | None = None) -> RenderResult:
    """Render ``doc`` as Markdown, returning the text and the lossy flag."""
    return MarkdownRenderer(options).render(doc)
