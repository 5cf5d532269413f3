#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/parsers/source.py
"""Immutable view over a parsed HTML tree.

BeautifulSoup does the actual parsing (including entity decoding); the tree
it produces is copied once into SourceNode objects so that the rest of the
engine reads a small, read-only structure and never touches parser state.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional

from richexport.exceptions import ValidationError

logger = logging.getLogger(__name__)

ROOT_TAG = "#document"

SourceKind = Literal["text", "element"]


@dataclass(frozen=True)
class SourceNode:
    """One node of the parsed HTML tree.

    Parameters
    ----------
    kind : {"text", "element"}
        Node kind
    tag_name : str
        Lowercased tag name (elements only)
    attributes : Mapping[str, str]
        Attribute values; multi-valued attributes such as ``class`` are
        joined with single spaces
    children : tuple of SourceNode
        Child nodes in document order
    text : str
        Decoded character data (text nodes only)

    """

    kind: SourceKind
    tag_name: str = ""
    attributes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    children: tuple[SourceNode, ...] = ()
    text: str = ""

    @classmethod
    def text_node(cls, text: str) -> SourceNode:
        """Create a text node."""
        return cls(kind="text", text=text)

    @classmethod
    def element(
        cls,
        tag_name: str,
        attributes: Optional[Mapping[str, str]] = None,
        children: tuple[SourceNode, ...] | list[SourceNode] = (),
    ) -> SourceNode:
        """Create an element node."""
        return cls(
            kind="element",
            tag_name=tag_name.lower(),
            attributes=MappingProxyType(dict(attributes or {})),
            children=tuple(children),
        )

    @property
    def is_text(self) -> bool:
        return self.kind == "text"

    @property
    def is_element(self) -> bool:
        return self.kind == "element"

    @cached_property
    def text_content(self) -> str:
        """Concatenated text of this node and all its descendants."""
        if self.is_text:
            return self.text
        return "".join(child.text_content for child in self.children)

    @cached_property
    def classes(self) -> frozenset[str]:
        """Tokens of the ``class`` attribute."""
        return frozenset(self.attributes.get("class", "").split())

    @property
    def element_children(self) -> tuple[SourceNode, ...]:
        return tuple(child for child in self.children if child.is_element)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return attribute ``name`` or ``default``."""
        return self.attributes.get(name, default)

    def has_element_children(self) -> bool:
        return any(child.is_element for child in self.children)

    def is_blank(self) -> bool:
        """Whether this node contains only whitespace and no elements at all."""
        if self.is_text:
            return not self.text.strip()
        return not self.has_element_children() and not self.text_content.strip()


def _convert_bs4_node(node: Any) -> Optional[SourceNode]:
    """Copy one BeautifulSoup node (and its subtree) into a SourceNode."""
    from bs4.element import NavigableString, PreformattedString, Tag

    if isinstance(node, Tag):
        attributes: dict[str, str] = {}
        for name, value in node.attrs.items():
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            attributes[name.lower()] = "" if value is None else str(value)
        children = []
        for child in node.children:
            converted = _convert_bs4_node(child)
            if converted is not None:
                children.append(converted)
        return SourceNode.element(node.name, attributes, children)

    # Comments, doctypes, CDATA and processing instructions carry no content
    if isinstance(node, PreformattedString):
        return None

    if isinstance(node, NavigableString):
        return SourceNode.text_node(str(node))

    return None


def parse_html(html: str, parser: str = "html.parser") -> SourceNode:
    """Parse an HTML string into a SourceNode tree.

    The returned root is a synthetic ``#document`` element whose children are
    the contents of ``<body>`` when the input is a full document, or the
    top-level nodes of the fragment otherwise.

    Parameters
    ----------
    html : str
        HTML markup (a fragment or a complete document)
    parser : str, default "html.parser"
        BeautifulSoup tree builder to use

    Returns
    -------
    SourceNode
        Root of the parsed tree

    Raises
    ------
    ValidationError
        If the requested tree builder is not installed

    """
    from bs4 import BeautifulSoup
    from bs4.element import Tag
    from bs4.exceptions import FeatureNotFound

    try:
        soup = BeautifulSoup(html, parser)
    except FeatureNotFound as e:
        raise ValidationError(
            f"HTML parser {parser!r} is not available: {e}",
            parameter_name="parser",
            parameter_value=parser,
            original_error=e,
        ) from e

    body = soup.find("body")
    container = body if isinstance(body, Tag) else soup

    children = []
    for child in container.children:
        converted = _convert_bs4_node(child)
        if converted is not None:
            children.append(converted)

    logger.debug("Parsed HTML into %d top-level nodes", len(children))
    return SourceNode.element(ROOT_TAG, {}, children)
