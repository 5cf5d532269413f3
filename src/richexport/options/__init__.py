#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/options/__init__.py
"""Renderer option classes."""

from richexport.options.base import BaseRendererOptions, CloneFrozenMixin
from richexport.options.docobject import DocumentObjectOptions
from richexport.options.docx import DocxOptions
from richexport.options.html import StyledHtmlOptions
from richexport.options.markdown import MarkdownOptions
from richexport.options.plaintext import PlainTextOptions

__all__ = [
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "DocumentObjectOptions",
    "DocxOptions",
    "MarkdownOptions",
    "PlainTextOptions",
    "StyledHtmlOptions",
]
