#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/utils/escape.py
"""Markdown escaping utilities.

Text written into Markdown must not be reinterpreted as syntax when the
output is parsed again. Escapes use backslashes, which every CommonMark
parser resolves back to the literal character.
"""

from __future__ import annotations

import re

_ALWAYS_ESCAPE = frozenset("\\`*{}[]<>~")
_ENTITY_LIKE = re.compile(r"&(?=#?[0-9A-Za-z]+;)")
_ORDERED_MARKER = re.compile(r"^(\d{1,9})([.)])(?=\s|$)")
_SETEXT_UNDERLINE = re.compile(r"^(=+|-+)\s*$")


def escape_markdown(text: str, context: str = "text") -> str:
    r"""Escape special Markdown characters in inline text.

    Underscores inside words (``snake_case``) are left alone; underscores at
    word boundaries are escaped. Pipes are escaped only in table cells.

    Parameters
    ----------
    text : str
        Text to escape
    context : {"text", "table"}, default "text"
        Where the text will be placed

    Examples
    --------
        >>> escape_markdown("This *should* not be italic")
        'This \\*should\\* not be italic'
        >>> escape_markdown("snake_case stays")
        'snake_case stays'
        >>> escape_markdown("a | b", context="table")
        'a \\| b'

    """
    if not text:
        return text

    escaped: list[str] = []
    for i, char in enumerate(text):
        if char in _ALWAYS_ESCAPE or (char == "|" and context == "table"):
            escaped.append("\\" + char)
        elif char == "_":
            prev_alnum = i > 0 and text[i - 1].isalnum()
            next_alnum = i < len(text) - 1 and text[i + 1].isalnum()
            escaped.append(char if prev_alnum and next_alnum else "\\_")
        else:
            escaped.append(char)
    return _ENTITY_LIKE.sub(r"\\&", "".join(escaped))


def escape_line_start(text: str) -> str:
    r"""Escape characters that would start a block construct at the beginning of a line.

    Examples
    --------
        >>> escape_line_start("# not a heading")
        '\\# not a heading'
        >>> escape_line_start("1. not a list")
        '1\\. not a list'
        >>> escape_line_start("- not a bullet")
        '\\- not a bullet'

    """
    if not text:
        return text
    if _SETEXT_UNDERLINE.match(text):
        return "\\" + text
    if text[0] == "#":
        return "\\" + text
    if text[0] in "+-" and (len(text) == 1 or text[1] in " \t"):
        return "\\" + text
    match = _ORDERED_MARKER.match(text)
    if match:
        return f"{match.group(1)}\\{match.group(2)}{text[match.end():]}"
    return text


def escape_inline_code(code: str) -> str:
    """Wrap ``code`` in a backtick code span long enough to contain it.

    Examples
    --------
        >>> escape_inline_code("print()")
        '`print()`'
        >>> escape_inline_code("a ` b")
        '`` a ` b ``'

    """
    longest = max((len(run) for run in re.findall(r"`+", code)), default=0)
    fence = "`" * (longest + 1)
    if longest:
        return f"{fence} {code} {fence}"
    return f"{fence}{code}{fence}"


def markdown_url(url: str) -> str:
    """Format a link destination, using angle brackets when it holds spaces or parentheses."""
    if any(char in url for char in " ()<>"):
        return "<" + url.replace("<", "%3C").replace(">", "%3E") + ">"
    return url


def fence_for(content: str, char: str = "`", minimum: int = 3) -> str:
    """Return a code fence longer than any run of ``char`` inside ``content``."""
    longest = max((len(run) for run in re.findall(re.escape(char) + "+", content)), default=0)
    return char * max(minimum, longest + 1)
