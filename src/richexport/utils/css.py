#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/utils/css.py
"""Inline ``style`` attribute helpers.

Only inline declarations are read; no stylesheet is ever resolved. The
helpers translate the handful of properties the editor writes (colors,
weight, emphasis, decoration, alignment) into StyleSet marks.

"""

from __future__ import annotations

import re
from typing import Any, Optional

from richexport.constants import ALIGNMENTS

_HEX_RE = re.compile(r"#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})\b")
_RGB_RE = re.compile(r"rgba?\(\s*([^)]*)\)", re.IGNORECASE)

_IGNORED_COLOR_VALUES = frozenset({"inherit", "initial", "unset", "revert", "transparent", "currentcolor", "none"})

# CSS basic color keywords
NAMED_COLORS = {
    "black": "#000000",
    "silver": "#c0c0c0",
    "gray": "#808080",
    "grey": "#808080",
    "white": "#ffffff",
    "maroon": "#800000",
    "red": "#ff0000",
    "purple": "#800080",
    "fuchsia": "#ff00ff",
    "magenta": "#ff00ff",
    "green": "#008000",
    "lime": "#00ff00",
    "olive": "#808000",
    "yellow": "#ffff00",
    "navy": "#000080",
    "blue": "#0000ff",
    "teal": "#008080",
    "aqua": "#00ffff",
    "cyan": "#00ffff",
    "orange": "#ffa500",
}

_BOLD_WEIGHTS = frozenset({"bold", "bolder", "600", "700", "800", "900"})


def parse_style_attribute(style: Optional[str]) -> dict[str, str]:
    """Split an inline style declaration list into a property mapping.

    Property names are lowercased; values keep their case but are trimmed.
    Malformed declarations are skipped.

    Examples
    --------
        >>> parse_style_attribute("color: #F00; font-weight:bold")
        {'color': '#F00', 'font-weight': 'bold'}

    """
    declarations: dict[str, str] = {}
    if not style:
        return declarations
    for declaration in style.split(";"):
        name, sep, value = declaration.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        value = value.replace("!important", "").strip()
        if name and value:
            declarations[name] = value
    return declarations


def _channel(value: str) -> Optional[int]:
    value = value.strip()
    try:
        if value.endswith("%"):
            number = float(value[:-1]) * 255 / 100
        else:
            number = float(value)
    except ValueError:
        return None
    return max(0, min(255, round(number)))


def normalize_color(value: Optional[str]) -> Optional[str]:
    """Normalize a CSS color value.

    Hex and ``rgb()``/``rgba()`` values and basic keywords become lowercase
    ``#rrggbb``; other values are returned trimmed and lowercased; empty and
    inheriting values (``inherit``, ``transparent``...) return None.

    Examples
    --------
        >>> normalize_color("#F00")
        '#ff0000'
        >>> normalize_color("rgb(0, 128, 255)")
        '#0080ff'
        >>> normalize_color("inherit") is None
        True

    """
    if value is None:
        return None
    value = value.strip().lower()
    if not value or value in _IGNORED_COLOR_VALUES:
        return None

    if value.startswith("#"):
        digits = value[1:]
        if len(digits) in (3, 4) and all(c in "0123456789abcdef" for c in digits):
            return "#" + "".join(c * 2 for c in digits[:3])
        if len(digits) in (6, 8) and all(c in "0123456789abcdef" for c in digits):
            return "#" + digits[:6]
        return value

    match = _RGB_RE.fullmatch(value)
    if match:
        parts = re.split(r"[\s,/]+", match.group(1).strip())
        if len(parts) >= 4:
            # zero alpha is transparent
            try:
                if float(parts[3].rstrip("%")) == 0:
                    return None
            except ValueError:
                pass
        channels = [_channel(part) for part in parts[:3]]
        if len(channels) < 3 or any(c is None for c in channels):
            return value
        return "#" + "".join(f"{c:02x}" for c in channels if c is not None)

    return NAMED_COLORS.get(value, value)


def _extract_background_color(value: str) -> Optional[str]:
    """Pull the color out of a ``background`` shorthand value."""
    for pattern in (_HEX_RE, _RGB_RE):
        match = pattern.search(value)
        if match:
            return normalize_color(match.group(0))
    for token in value.lower().split():
        if token in NAMED_COLORS or token in _IGNORED_COLOR_VALUES:
            return normalize_color(token)
    return None


def style_marks(style: Optional[str]) -> dict[str, Any]:
    """Translate an inline style into StyleSet mark changes.

    Only positive marks are produced (``font-weight: normal`` does not clear
    an inherited bold).

    Parameters
    ----------
    style : str or None
        Raw ``style`` attribute value

    Returns
    -------
    dict
        Keyword arguments for ``StyleSet.with_marks``

    """
    declarations = parse_style_attribute(style)
    marks: dict[str, Any] = {}
    if not declarations:
        return marks

    weight = declarations.get("font-weight", "").lower()
    if weight in _BOLD_WEIGHTS:
        marks["bold"] = True

    if declarations.get("font-style", "").lower() in ("italic", "oblique"):
        marks["italic"] = True

    decoration = " ".join(
        declarations.get(name, "").lower() for name in ("text-decoration", "text-decoration-line")
    )
    if "underline" in decoration:
        marks["underline"] = True
    if "line-through" in decoration:
        marks["strikethrough"] = True

    vertical = declarations.get("vertical-align", "").lower()
    if vertical == "super":
        marks["superscript"] = True
        marks["subscript"] = False
    elif vertical == "sub":
        marks["subscript"] = True
        marks["superscript"] = False

    color = normalize_color(declarations.get("color"))
    if color:
        marks["color"] = color

    if "background-color" in declarations:
        highlight = normalize_color(declarations["background-color"])
    elif "background" in declarations:
        highlight = _extract_background_color(declarations["background"])
    else:
        highlight = None
    if highlight:
        marks["highlight"] = highlight

    return marks


def style_alignment(style: Optional[str], align_attribute: Optional[str] = None) -> Optional[str]:
    """Return the paragraph alignment from ``text-align`` or the legacy ``align`` attribute."""
    value = parse_style_attribute(style).get("text-align") or align_attribute or ""
    value = value.strip().lower()
    if value in ("start", "initial"):
        value = "left"
    elif value == "end":
        value = "right"
    return value if value in ALIGNMENTS else None
