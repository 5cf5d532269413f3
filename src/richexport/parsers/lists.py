#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/parsers/lists.py
"""Flattening of nested HTML lists into depth-annotated list items."""

from __future__ import annotations

import logging
from dataclasses import replace

from richexport.ast.nodes import ListItem, TextRun
from richexport.parsers.classifier import classify
from richexport.parsers.runs import block_style, build_runs_from_nodes
from richexport.parsers.source import SourceNode

logger = logging.getLogger(__name__)


def _start_index(node: SourceNode) -> int:
    """First ordinal of an ordered list, honoring ``start``."""
    start = node.get("start")
    if start is None:
        return 1
    try:
        value = int(start.strip())
    except ValueError:
        logger.debug("Ignoring non-numeric list start %r", start)
        return 1
    return max(value, 0)


def _item_runs(item: SourceNode) -> list[TextRun]:
    """Inline content of one ``<li>``: every child except nested lists.

    Block children (the ``<p>`` wrappers rich-text editors emit inside list
    items) are separated from each other by line-break markers.
    """
    own_children = [child for child in item.children if classify(child).kind != "list"]
    return build_runs_from_nodes(own_children, block_style(item))


def flatten_list(node: SourceNode, depth: int = 0) -> list[ListItem]:
    """Flatten a (possibly nested) list element into ListItem entries.

    Each ``<li>`` yields one entry at ``depth`` built from its own inline
    content, followed by the entries of any list nested inside it at
    ``depth + 1``. Ordinals restart for every distinct list node and advance
    once per item of that node, so sibling and nested lists never share a
    counter. The first entry of every list node is flagged with
    ``list_start`` so renderers can keep adjacent lists apart.

    Parameters
    ----------
    node : SourceNode
        A ``<ul>``, ``<ol>`` (or ``<menu>``/``<dir>``) element
    depth : int, default 0
        Nesting depth of ``node``

    Returns
    -------
    list of ListItem
        Entries in document order

    Examples
    --------
        >>> from richexport.parsers.source import parse_html
        >>> root = parse_html("<ol><li>a<ol><li>b</li></ol></li><li>c</li></ol>")
        >>> [(i.depth, i.index) for i in flatten_list(root.children[0])]
        [(0, 1), (1, 1), (0, 2)]

    """
    category = classify(node)
    ordered = category.ordered if category.kind == "list" else False
    index = _start_index(node) if ordered else 1

    entries: list[ListItem] = []
    for child in node.children:
        kind = classify(child).kind

        if kind == "list-item":
            entries.append(ListItem(depth=depth, ordered=ordered, index=index, runs=_item_runs(child)))
            index += 1
            for nested in child.children:
                if classify(nested).kind == "list":
                    entries.extend(flatten_list(nested, depth + 1))
        elif kind == "list":
            # <ul><ul>...</ul></ul>: the stray list nests under its predecessor
            entries.extend(flatten_list(child, depth + 1))
        elif kind == "discard" or child.is_blank():
            continue
        else:
            logger.debug("Treating stray <%s> inside a list as an item", child.tag_name or "#text")
            runs = build_runs_from_nodes([child])
            if runs:
                entries.append(ListItem(depth=depth, ordered=ordered, index=index, runs=runs))
                index += 1
    if entries:
        entries[0] = replace(entries[0], list_start=True)
    return entries

