#  Copyright (c) 2025 Tom Villani, Ph.D.
# richexport/options/html.py
"""Configuration options for styled HTML rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from richexport.constants import DEFAULT_HTML_LANGUAGE, DEFAULT_HTML_TITLE, SEMANTIC_ATTRIBUTES
from richexport.options.base import BaseRendererOptions


@dataclass(frozen=True)
class StyledHtmlOptions(BaseRendererOptions):
    """Configuration options for the standalone HTML snapshot.

    Parameters
    ----------
    language : str, default "en"
        Value of the ``lang`` attribute on ``<html>``
    include_stylesheet : bool, default True
        Embed the baseline stylesheet in ``<head>``
    extra_css : str or None, default None
        CSS appended after the baseline stylesheet
    kept_attributes : frozenset of str
        Attributes that survive re-serialization; everything else is
        editor bookkeeping and is stripped
    default_title : str, default "Exported Document"
        ``<title>`` used when the document has no title

    """

    language: str = field(default=DEFAULT_HTML_LANGUAGE, metadata={"help": "Document language", "importance": "core"})
    include_stylesheet: bool = field(
        default=True,
        metadata={
            "help": "Embed the baseline stylesheet",
            "importance": "core",
        },
    )
    extra_css: str | None = field(
        default=None, metadata={"help": "Additional CSS appended to the stylesheet", "importance": "advanced"}
    )
    kept_attributes: frozenset[str] = field(
        default=SEMANTIC_ATTRIBUTES,
        metadata={"help": "Attributes preserved in the output", "importance": "security"},
    )
    default_title: str = field(
        default=DEFAULT_HTML_TITLE, metadata={"help": "Title used when none is given", "importance": "core"}
    )

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.kept_attributes, frozenset):
            object.__setattr__(self, "kept_attributes", frozenset(a.lower() for a in self.kept_attributes))
        if not self.language.strip():
            raise ValueError("language must not be empty")
        if self.extra_css and "</style" in self.extra_css.lower():
            raise ValueError("extra_css must not close the <style> element")
