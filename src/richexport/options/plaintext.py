#  Copyright (c) 2025 Tom Villani, Ph.D.
# richexport/options/plaintext.py
"""Configuration options for plain text rendering."""

from dataclasses import dataclass, field

from richexport.constants import DEFAULT_BULLET_MARKER
from richexport.options.base import BaseRendererOptions


@dataclass(frozen=True)
class PlainTextOptions(BaseRendererOptions):
    """Configuration options for plain text rendering.

    All formatting is stripped; structure degrades to indentation, bullet and
    number prefixes, ``> `` quote prefixes and separator-joined table cells.

    Parameters
    ----------
    table_cell_separator : str, default " | "
        Separator string placed between table cells. Rows are never padded.
    bullet : str, default "• "
        Prefix of unordered list items (after the depth indentation).
    underline_title : bool, default True
        Underline the document title with ``underline_char``.
    underline_char : str, default "="
        Character repeated under the title.

    """

    table_cell_separator: str = field(
        default=" | ", metadata={"help": "Separator between table cells", "type": str, "importance": "advanced"}
    )
    bullet: str = field(
        default=f"{DEFAULT_BULLET_MARKER} ",
        metadata={"help": "Prefix for unordered list items", "type": str, "importance": "advanced"},
    )
    underline_title: bool = field(
        default=True,
        metadata={"help": "Underline the document title", "importance": "core"},
    )
    underline_char: str = field(
        default="=", metadata={"help": "Character used to underline the title", "type": str, "importance": "advanced"}
    )

    def __post_init__(self) -> None:
        super().__post_init__()
        if len(self.underline_char) != 1:
            raise ValueError(f"underline_char must be a single character, got {self.underline_char!r}")
        if "\n" in self.table_cell_separator:
            raise ValueError("table_cell_separator must not contain newlines")
