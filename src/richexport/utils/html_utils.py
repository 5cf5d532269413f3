#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/utils/html_utils.py
"""HTML text, attribute and URL helpers shared by parsers and renderers."""

from __future__ import annotations

import re
from html import escape as _html_escape
from typing import Optional
from urllib.parse import urlparse

from richexport.constants import DANGEROUS_SCHEMES

# ASCII whitespace only: a non-breaking space is content, not layout
_COLLAPSIBLE_WHITESPACE = re.compile(r"[ \t\n\r\f]+")

# Invisible characters that editors leave behind (zero-width spaces, BOM)
_INVISIBLE_CHARACTERS = re.compile("[\u200b\u200c\u200d\u2060\ufeff\x00]")


def escape_html(text: str) -> str:
    """Escape text content for inclusion between tags."""
    return _html_escape(text, quote=False)


def escape_attribute(value: str) -> str:
    """Escape an attribute value for inclusion inside double quotes."""
    return _html_escape(value, quote=True)


def normalize_text(text: str) -> str:
    """Apply HTML whitespace collapsing to decoded character data.

    Runs of ASCII whitespace become one space, non-breaking spaces become
    plain spaces, and invisible editor characters are removed.

    Examples
    --------
        >>> normalize_text("a \\n\\t b\\xa0c")
        'a b c'

    """
    text = _INVISIBLE_CHARACTERS.sub("", text)
    text = _COLLAPSIBLE_WHITESPACE.sub(" ", text)
    return text.replace("\xa0", " ")


def is_relative_url(url: str) -> bool:
    """Check whether ``url`` carries no scheme."""
    if url.startswith(("#", "/", "./", "../", "?")):
        return True
    return not urlparse(url).scheme


def is_url_scheme_dangerous(url: str) -> bool:
    """Check if a URL uses a script-capable scheme.

    Examples
    --------
    >>> is_url_scheme_dangerous("https://example.com")
    False
    >>> is_url_scheme_dangerous("javascript:alert('xss')")
    True
    >>> is_url_scheme_dangerous("data:image/png;base64,AAAA")
    False

    """
    if not url or not url.strip():
        return False

    # Browsers ignore embedded whitespace and control characters in schemes
    url_lower = re.sub(r"[\s\x00-\x1f]", "", url).lower()

    if is_relative_url(url_lower):
        return False

    if any(url_lower.startswith(scheme) for scheme in DANGEROUS_SCHEMES):
        return True

    return urlparse(url_lower).scheme in ("javascript", "vbscript", "about")


def safe_url(url: Optional[str]) -> Optional[str]:
    """Return the trimmed ``url``, or None if it is empty or dangerous."""
    if url is None:
        return None
    url = url.strip()
    if not url or is_url_scheme_dangerous(url):
        return None
    return url

