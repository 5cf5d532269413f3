#  Copyright (c) 2025 Tom Villani, Ph.D.
# richexport/options/markdown.py
"""Configuration options for Markdown rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from richexport.options.base import BaseRendererOptions

HardBreakMode = Literal["backslash", "spaces"]


@dataclass(frozen=True)
class MarkdownOptions(BaseRendererOptions):
    r"""Configuration options for Markdown rendering.

    Parameters
    ----------
    bullet : {"-", "*", "+"}, default "-"
        Marker for unordered list items.
    escape_special : bool, default True
        Backslash-escape characters that Markdown would otherwise interpret
        (``*``, ``_``, ``[``, leading ``#`` and so on).
    include_title : bool, default True
        Emit the document title as a level-1 heading.
    hard_break : {"backslash", "spaces"}, default "backslash"
        How line breaks inside a block are written: ``\`` or two trailing spaces.

    Examples
    --------
        >>> from richexport.renderers.markdown import MarkdownRenderer
        >>> renderer = MarkdownRenderer(MarkdownOptions(bullet="*"))

    """

    bullet: str = field(
        default="-",
        metadata={"help": "Bullet character for unordered lists", "choices": ["-", "*", "+"], "importance": "core"},
    )
    escape_special: bool = field(
        default=True,
        metadata={
            "help": "Escape special Markdown characters in text",
            "importance": "advanced",
        },
    )
    include_title: bool = field(
        default=True,
        metadata={"help": "Render the title as a level-1 heading", "importance": "core"},
    )
    hard_break: HardBreakMode = field(
        default="backslash",
        metadata={"help": "Hard line break style", "choices": ["backslash", "spaces"], "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.bullet not in ("-", "*", "+"):
            raise ValueError(f"bullet must be one of '-', '*', '+', got {self.bullet!r}")
        if self.hard_break not in ("backslash", "spaces"):
            raise ValueError(f"hard_break must be 'backslash' or 'spaces', got {self.hard_break!r}")
