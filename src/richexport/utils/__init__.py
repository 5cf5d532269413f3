#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/utils/__init__.py
"""Utility modules for richexport.

CSS and HTML text helpers used by the parsers, image data-URI decoding for
the DOCX serializer, and atomic file output.
"""

from richexport.utils.html_utils import escape_attribute, escape_html, normalize_text, safe_url
from richexport.utils.io_utils import atomic_write, sanitize_file_name

__all__ = [
    "atomic_write",
    "escape_attribute",
    "escape_html",
    "normalize_text",
    "safe_url",
    "sanitize_file_name",
]
