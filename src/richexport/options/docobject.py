#  Copyright (c) 2025 Tom Villani, Ph.D.
# richexport/options/docobject.py
"""Configuration options for the document-object renderer.

Spacing and indentation values are in twentieths of a point, the unit office
document formats use for paragraph layout.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from richexport.constants import (
    DEFAULT_BULLET_MARKER,
    DEFAULT_CODE_FONT,
    DEFAULT_CODE_SHADING,
    DEFAULT_DOCUMENT_DESCRIPTION,
    DEFAULT_HANGING_INDENT,
    DEFAULT_HEADER_SHADING,
    DEFAULT_HEADING_SPACING_AFTER,
    DEFAULT_HEADING_SPACING_BEFORE,
    DEFAULT_INDENT_STEP,
    DEFAULT_LIST_SPACING,
    DEFAULT_PARAGRAPH_SPACING_AFTER,
    DEFAULT_QUOTE_BORDER_COLOR,
    DEFAULT_QUOTE_BORDER_SIZE,
    DEFAULT_QUOTE_SPACING,
    DEFAULT_TITLE_SPACING_AFTER,
)
from richexport.options.base import BaseRendererOptions

_HEX_COLOR = re.compile(r"^[0-9A-Fa-f]{6}$")


@dataclass(frozen=True)
class DocumentObjectOptions(BaseRendererOptions):
    """Layout constants for the generic document object.

    Parameters
    ----------
    title_spacing_after : int, default 200
        Space after the title paragraph
    heading_spacing_before, heading_spacing_after : int, default 240 / 120
        Space around headings
    paragraph_spacing_after : int, default 120
        Space after body paragraphs
    list_spacing : int, default 100
        Space before and after each list item
    quote_spacing : int, default 200
        Space before and after quoted paragraphs
    indent_step : int, default 720
        Left indent added per list depth and for quotes
    hanging_indent : int, default 360
        Hanging indent of list items (room for the marker)
    bullet_marker : str, default "•"
        Marker text of unordered items
    header_shading : str, default "EEEEEE"
        Fill color of table header cells
    quote_border_color : str, default "CCCCCC"
        Left border color of quotes
    quote_border_size : int, default 4
        Left border width of quotes, in eighths of a point
    code_font : str, default "Courier New"
        Font of code runs and code blocks
    code_shading : str, default "F5F5F5"
        Fill color of code block paragraphs
    description : str
        Document description written to the core properties

    """

    title_spacing_after: int = field(
        default=DEFAULT_TITLE_SPACING_AFTER, metadata={"help": "Spacing after the title", "importance": "advanced"}
    )
    heading_spacing_before: int = field(
        default=DEFAULT_HEADING_SPACING_BEFORE,
        metadata={"help": "Spacing before headings", "importance": "advanced"},
    )
    heading_spacing_after: int = field(
        default=DEFAULT_HEADING_SPACING_AFTER, metadata={"help": "Spacing after headings", "importance": "advanced"}
    )
    paragraph_spacing_after: int = field(
        default=DEFAULT_PARAGRAPH_SPACING_AFTER,
        metadata={"help": "Spacing after paragraphs", "importance": "advanced"},
    )
    list_spacing: int = field(
        default=DEFAULT_LIST_SPACING, metadata={"help": "Spacing around list items", "importance": "advanced"}
    )
    quote_spacing: int = field(
        default=DEFAULT_QUOTE_SPACING, metadata={"help": "Spacing around quotes", "importance": "advanced"}
    )
    indent_step: int = field(
        default=DEFAULT_INDENT_STEP, metadata={"help": "Indent per list level", "importance": "advanced"}
    )
    hanging_indent: int = field(
        default=DEFAULT_HANGING_INDENT, metadata={"help": "Hanging indent of list items", "importance": "advanced"}
    )
    bullet_marker: str = field(
        default=DEFAULT_BULLET_MARKER, metadata={"help": "Marker for unordered items", "importance": "core"}
    )
    header_shading: str = field(
        default=DEFAULT_HEADER_SHADING, metadata={"help": "Table header fill (RRGGBB)", "importance": "advanced"}
    )
    quote_border_color: str = field(
        default=DEFAULT_QUOTE_BORDER_COLOR,
        metadata={"help": "Quote border color (RRGGBB)", "importance": "advanced"},
    )
    quote_border_size: int = field(
        default=DEFAULT_QUOTE_BORDER_SIZE, metadata={"help": "Quote border width", "importance": "advanced"}
    )
    code_font: str = field(default=DEFAULT_CODE_FONT, metadata={"help": "Font for code", "importance": "core"})
    code_shading: str = field(
        default=DEFAULT_CODE_SHADING, metadata={"help": "Code block fill (RRGGBB)", "importance": "advanced"}
    )
    description: str = field(
        default=DEFAULT_DOCUMENT_DESCRIPTION,
        metadata={"help": "Description stored in document properties", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate spacing and colors.

        Raises
        ------
        ValueError
            If a spacing value is negative or a color is not RRGGBB hex.

        """
        super().__post_init__()
        for name in (
            "title_spacing_after",
            "heading_spacing_before",
            "heading_spacing_after",
            "paragraph_spacing_after",
            "list_spacing",
            "quote_spacing",
            "indent_step",
            "hanging_indent",
            "quote_border_size",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        for name in ("header_shading", "quote_border_color", "code_shading"):
            value = getattr(self, name)
            if not _HEX_COLOR.match(value):
                raise ValueError(f"{name} must be a 6-digit hex color, got {value!r}")
