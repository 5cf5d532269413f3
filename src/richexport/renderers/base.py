#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/renderers/base.py
"""Base classes for document renderers.

This module defines the abstract base class every renderer inherits from,
the RenderResult returned by the text renderers, and the small run
normalization helpers they share.

"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Union

from richexport.ast.nodes import Document, StyleSet, TextRun
from richexport.exceptions import InvalidOptionsError
from richexport.options.base import BaseRendererOptions
from richexport.utils.io_utils import atomic_write

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


@dataclass(frozen=True)
class RenderResult:
    """Output of a text renderer.

    Parameters
    ----------
    content : str
        The rendered text
    lossy : bool
        True when some source styling has no representation in the target
        format and was dropped. The conversion still succeeded.
    lost_styles : frozenset of str
        Names of the dropped marks (``color``, ``highlight``...)

    """

    content: str
    lossy: bool = False
    lost_styles: frozenset[str] = field(default_factory=frozenset)

    def __str__(self) -> str:
        return self.content


class BaseRenderer(ABC):
    """Abstract base class for all document renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> class WordCountRenderer(BaseRenderer):
        ...     def render(self, doc):
        ...         return sum(len(r.text.split()) for r in iter_runs(doc.blocks))

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, doc: Document) -> Any:
        """Render ``doc`` into this renderer's output object.

        Parameters
        ----------
        doc : Document
            Document to render

        """

    def render_to_string(self, doc: Document) -> str:
        """Render the document to a string (if applicable).

        Raises
        ------
        NotImplementedError
            If the renderer does not support string output

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    def render_to_bytes(self, doc: Document) -> bytes:
        """Render the document to bytes; text renderers encode their string as UTF-8."""
        return self.render_to_string(doc).encode("utf-8")

    def render_to_file(self, doc: Document, path: Union[str, Path]) -> Path:
        """Render the document and write it atomically to ``path``."""
        return atomic_write(path, self.render_to_bytes(doc))

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )


class LossTracker:
    """Mixin recording marks a renderer cannot represent.

    The implementing class sets ``_unsupported_marks`` and resets
    ``_lost_styles`` at the start of every render.
    """

    _unsupported_marks: frozenset[str] = frozenset()
    _lost_styles: set[str]

    def _record_losses(self, style: StyleSet) -> None:
        lost = style.marks & self._unsupported_marks
        if lost:
            self._lost_styles.update(lost)


def merge_runs(runs: Iterable[TextRun]) -> list[TextRun]:
    """Merge adjacent text runs that share an identical StyleSet.

    Break markers are never merged.

    Examples
    --------
        >>> [run.text for run in merge_runs([TextRun("a"), TextRun("b")])]
        ['ab']

    """
    merged: list[TextRun] = []
    for run in runs:
        if merged and not run.is_break and not merged[-1].is_break and merged[-1].style == run.style:
            merged[-1] = TextRun(text=merged[-1].text + run.text, style=run.style)
        else:
            merged.append(run)
    return merged


def collapse_blank_lines(text: str) -> str:
    """Collapse three or more consecutive newlines to exactly two."""
    return _EXCESS_NEWLINES.sub("\n\n", text)


def finalize_text(text: str) -> str:
    """Collapse blank lines and trim blank space around the whole output."""
    return collapse_blank_lines(text).strip("\n").rstrip()


def join_blocks(chunks: Iterable[tuple[str, bool, bool]]) -> str:
    """Join rendered blocks with a blank line, keeping consecutive list items on adjacent lines.

    Parameters
    ----------
    chunks : iterable of (str, bool, bool)
        Rendered block text, whether the block is a list item, and whether
        that item opens a new top-level list (which gets a blank line even
        after another list item)

    """
    parts: list[str] = []
    previous_is_item = False
    for text, is_item, starts_list in chunks:
        if parts:
            tight = is_item and previous_is_item and not starts_list
            parts.append("\n" if tight else "\n\n")
        parts.append(text)
        previous_is_item = is_item
    return "".join(parts)
