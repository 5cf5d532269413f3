#  Copyright (c) 2025 Tom Villani, Ph.D.
# richexport/options/docx.py
"""Configuration options for DOCX serialization."""

from __future__ import annotations

from dataclasses import dataclass, field

from richexport.constants import DEFAULT_CODE_FONT_SIZE, DEFAULT_DOCX_FONT, DEFAULT_DOCX_FONT_SIZE
from richexport.options.base import BaseRendererOptions


@dataclass(frozen=True)
class DocxOptions(BaseRendererOptions):
    """Configuration options for writing the document object as DOCX.

    Parameters
    ----------
    default_font : str, default "Calibri"
        Font of the Normal style
    default_font_size : int, default 11
        Size of the Normal style, in points
    code_font_size : int, default 10
        Size of code runs and code blocks, in points
    embed_data_images : bool, default True
        Embed images given as ``data:`` URIs. Remote images are never
        fetched; they are written as their alt text and URL.
    fail_on_resource_errors : bool, default False
        Raise instead of falling back to text when a data URI image cannot
        be decoded or embedded

    """

    default_font: str = field(
        default=DEFAULT_DOCX_FONT, metadata={"help": "Default font for body text", "importance": "core"}
    )
    default_font_size: int = field(
        default=DEFAULT_DOCX_FONT_SIZE,
        metadata={"help": "Default font size in points", "type": int, "importance": "core"},
    )
    code_font_size: int = field(
        default=DEFAULT_CODE_FONT_SIZE,
        metadata={"help": "Font size for code in points", "type": int, "importance": "advanced"},
    )
    embed_data_images: bool = field(
        default=True,
        metadata={
            "help": "Embed data URI images in the document",
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If a font size is not positive.

        """
        super().__post_init__()
        if self.default_font_size <= 0:
            raise ValueError(f"default_font_size must be positive, got {self.default_font_size}")
        if self.code_font_size <= 0:
            raise ValueError(f"code_font_size must be positive, got {self.code_font_size}")
