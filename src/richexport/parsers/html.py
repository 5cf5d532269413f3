#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/parsers/html.py
"""HTML to Document converter.

This module turns the editor's HTML into the block/run document model that
every renderer consumes. Each node is classified once; headings, paragraphs,
lists, tables, quotes, code, figures and formulas map onto their block
types, and inline content between blocks is gathered into paragraphs.

Conversion never raises for unusual markup. Unknown tags become transparent
containers or implicit paragraphs, anchors around blocks lose their href,
and ragged tables stay ragged.

"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Iterable, Optional

from richexport.ast.nodes import (
    Block,
    Blockquote,
    CodeBlock,
    Document,
    Grid,
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
from richexport.constants import MATH_FORMULA_ATTRIBUTE
from richexport.parsers.classifier import Category, classify
from richexport.parsers.lists import flatten_list
from richexport.parsers.runs import block_style, build_runs, build_runs_from_nodes, is_image_only
from richexport.parsers.source import SourceNode, parse_html
from richexport.parsers.tables import extract_row, extract_table
from richexport.utils.css import style_alignment
from richexport.utils.html_utils import normalize_text, safe_url

logger = logging.getLogger(__name__)

_LANGUAGE_CLASS = re.compile(r"^(?:language|lang)-([A-Za-z0-9_+#.-]+)$")


def _has_text(runs: Iterable[TextRun]) -> bool:
    return any(not run.is_break and run.text.strip() for run in runs)


def _extract_language(node: SourceNode) -> Optional[str]:
    """Language of a code block from a ``language-*``/``lang-*`` class on ``<pre>`` or its ``<code>``."""
    candidates = [node] + [child for child in node.element_children if child.tag_name == "code"]
    for candidate in candidates:
        for token in sorted(candidate.classes):
            match = _LANGUAGE_CLASS.match(token)
            if match:
                return match.group(1).lower()
    return None


class HtmlToDocumentConverter:
    """Convert HTML markup to a Document.

    Parameters
    ----------
    parser : str, default "html.parser"
        BeautifulSoup tree builder used to parse the markup

    Examples
    --------
        >>> converter = HtmlToDocumentConverter()
        >>> doc = converter.convert("<h1>Title</h1><p>Body</p>")
        >>> [type(b).__name__ for b in doc.blocks]
        ['Heading', 'Paragraph']

    """

    def __init__(self, parser: str = "html.parser") -> None:
        self.parser = parser

    def convert(self, html: str, title: Optional[str] = None) -> Document:
        """Parse ``html`` and build its Document.

        Parameters
        ----------
        html : str
            Editor HTML (fragment or full document)
        title : str, optional
            Document title supplied with the request

        Returns
        -------
        Document
            Blocks in document order; ``source`` holds the parse tree

        """
        root = parse_html(html, self.parser)
        return self.convert_tree(root, title)

    def convert_tree(self, root: SourceNode, title: Optional[str] = None) -> Document:
        """Build a Document from an already parsed tree."""
        blocks = self._process_block_container(root.children)
        title = title.strip() if title else None
        logger.debug("Converted HTML into %d top-level blocks", len(blocks))
        return Document(blocks=blocks, title=title or None, source=root)

    # ------------------------------------------------------------------
    # Block containers
    # ------------------------------------------------------------------

    def _process_block_container(self, nodes: Iterable[SourceNode]) -> list[Block]:
        """Process the children of a container, wrapping loose inline content in paragraphs."""
        blocks: list[Block] = []
        inline_buffer: list[SourceNode] = []

        for child in nodes:
            category = classify(child)
            if category.is_inline:
                inline_buffer.append(child)
                continue
            if inline_buffer:
                blocks.extend(self._inline_blocks(inline_buffer, StyleSet(), None))
                inline_buffer = []
            blocks.extend(self._process_block(child, category))

        if inline_buffer:
            blocks.extend(self._inline_blocks(inline_buffer, StyleSet(), None))
        return blocks

    def _process_block(self, node: SourceNode, category: Category) -> list[Block]:
        kind = category.kind

        if kind == "discard":
            return []
        if kind == "heading":
            return self._process_heading(node, category.level or 1)
        if kind == "paragraph":
            if category.implicit:
                logger.debug("Unknown tag <%s> treated as an implicit paragraph", node.tag_name)
            return self._inline_blocks(node.children, block_style(node), self._alignment(node))
        if kind == "list":
            return list(flatten_list(node, 0))
        if kind == "list-item":
            logger.debug("Stray <li> outside a list; treating it as a one-item list")
            return [ListItem(depth=0, ordered=False, index=1, runs=build_runs(node, block_style(node)))]
        if kind == "blockquote":
            return self._process_blockquote(node)
        if kind == "table":
            return [Table(grid=extract_table(node))]
        if kind == "table-row":
            logger.debug("Stray <tr> outside a table; treating it as a one-row table")
            return [Table(grid=Grid(rows=[extract_row(node)]))]
        if kind == "table-cell":
            return self._inline_blocks(node.children, block_style(node), None)
        if kind == "figure":
            return self._process_figure(node)
        if kind == "horizontal-rule":
            return [HorizontalRule()]
        if kind == "code-block":
            return [self._process_code_block(node)]
        if kind == "math-block":
            formula = (node.get(MATH_FORMULA_ATTRIBUTE) or "").strip()
            return [MathBlock(formula=formula)] if formula else []

        # generic-container
        if category.implicit:
            logger.debug("Unknown tag <%s> treated as a transparent container", node.tag_name)
        children = self._process_block_container(node.children)
        return [RawContainer(children=children)] if children else []

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def _inline_blocks(
        self, nodes: Iterable[SourceNode], base_style: StyleSet, alignment: Optional[str]
    ) -> list[Block]:
        """Turn inline nodes into paragraphs, splitting out standalone images."""
        blocks: list[Block] = []
        pending: list[SourceNode] = []

        def flush() -> None:
            runs = build_runs_from_nodes(pending, base_style)
            if _has_text(runs):
                blocks.append(Paragraph(runs=runs, alignment=alignment))
            pending.clear()

        for node in nodes:
            if node.is_element and is_image_only(node):
                flush()
                blocks.extend(self._collect_images(node, None))
            else:
                pending.append(node)
        flush()
        return blocks

    def _collect_images(self, node: SourceNode, href: Optional[str]) -> list[Image]:
        if node.tag_name == "img":
            return [self._image(node, href)]
        if node.tag_name == "a":
            href = safe_url(node.get("href")) or href
        images: list[Image] = []
        for child in node.element_children:
            images.extend(self._collect_images(child, href))
        return images

    @staticmethod
    def _image(node: SourceNode, href: Optional[str] = None) -> Image:
        title = (node.get("title") or "").strip() or None
        return Image(
            src=safe_url(node.get("src")) or "",
            alt=normalize_text(node.get("alt") or "").strip(),
            title=title,
            href=href,
        )

    @staticmethod
    def _alignment(node: SourceNode) -> Optional[str]:
        return style_alignment(node.get("style"), node.get("align"))

    # ------------------------------------------------------------------
    # Specific blocks
    # ------------------------------------------------------------------

    def _process_heading(self, node: SourceNode, level: int) -> list[Block]:
        runs = build_runs(node, block_style(node))
        if not _has_text(runs):
            return []
        return [Heading(level=level, runs=runs, alignment=self._alignment(node))]

    def _process_blockquote(self, node: SourceNode) -> list[Block]:
        children = self._process_block_container(node.children)
        if not children:
            return []
        return [Blockquote(children=children)]

    def _process_code_block(self, node: SourceNode) -> CodeBlock:
        text = node.text_content.replace("\r\n", "\n").replace("\xa0", " ")
        # the newline right after <pre> is not content
        if text.startswith("\n"):
            text = text[1:]
        return CodeBlock(text=text.rstrip("\n"), language=_extract_language(node))

    def _process_figure(self, node: SourceNode) -> list[Block]:
        caption: Optional[str] = None
        content: list[SourceNode] = []
        for child in node.children:
            if child.tag_name == "figcaption":
                caption = normalize_text(child.text_content).strip() or caption
            else:
                content.append(child)

        blocks = self._process_block_container(content)
        if caption is None:
            return blocks

        for position in range(len(blocks) - 1, -1, -1):
            block = blocks[position]
            if isinstance(block, Image):
                blocks[position] = replace(block, caption=caption)
                return blocks

        blocks.append(Paragraph(runs=[TextRun(text=caption, style=StyleSet(italic=True))]))
        return blocks


def html_to_document(html: str, title: Optional[str] = None, parser: str = "html.parser") -> Document:
    """Convert HTML to a Document in one call."""
    return HtmlToDocumentConverter(parser=parser).convert(html, title)
