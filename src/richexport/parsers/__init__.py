#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richexport/parsers/__init__.py
"""HTML parsing into the document model.

The pipeline runs leaf-first: ``parse_html`` builds the immutable source
tree, ``classify`` assigns each node its structural category, the run, list
and table helpers build inline content, and ``HtmlToDocumentConverter``
assembles the Document.
"""

from richexport.parsers.classifier import Category, classify
from richexport.parsers.html import HtmlToDocumentConverter, html_to_document
from richexport.parsers.lists import flatten_list
from richexport.parsers.runs import build_runs, build_runs_from_nodes
from richexport.parsers.source import SourceNode, parse_html
from richexport.parsers.tables import extract_table

__all__ = [
    "Category",
    "HtmlToDocumentConverter",
    "SourceNode",
    "build_runs",
    "build_runs_from_nodes",
    "classify",
    "extract_table",
    "flatten_list",
    "html_to_document",
    "parse_html",
]
