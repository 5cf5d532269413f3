#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_api.py
"""Unit tests for the export API."""

import json

import pytest

from richexport import __version__, export, get_export_target, to_document
from richexport.api import EXPORT_TARGETS, ExportResult, ExportTarget, register_export_target
from richexport.constants import CONTENT_TYPE_DOCX
from richexport.exceptions import (
    EmptyInputError,
    InvalidOptionsError,
    RenderingError,
    RichExportError,
    UnsupportedTargetError,
    ValidationError,
)
from richexport.options import MarkdownOptions, PlainTextOptions
from richexport.renderers.base import BaseRenderer


@pytest.mark.unit
class TestTargets:
    """Tests for target lookup."""

    @pytest.mark.parametrize(
        "name,expected",
        [("txt", "txt"), ("text", "txt"), ("MD", "markdown"), (" markdown ", "markdown"), ("htm", "html"),
         ("word", "docx"), ("json", "json")],
    )
    def test_names_and_aliases(self, name, expected):
        assert get_export_target(name).name == expected

    def test_unknown_target(self):
        with pytest.raises(UnsupportedTargetError) as exc_info:
            get_export_target("pdf")
        assert exc_info.value.target == "pdf"
        assert exc_info.value.supported_targets == sorted(EXPORT_TARGETS)
        assert isinstance(exc_info.value, ValidationError)

    def test_binary_targets(self):
        assert get_export_target("docx").is_binary
        assert not get_export_target("json").is_binary
        assert not get_export_target("txt").is_binary

    def test_register_target(self):
        class UpperRenderer(BaseRenderer):
            def render(self, doc):
                return "UPPER"

        try:
            register_export_target(ExportTarget("upper", "up", "text/plain", UpperRenderer))
            result = export("<p>x</p>", "upper")
            assert result.content == "UPPER"
            assert result.file_name == "document.up"
        finally:
            EXPORT_TARGETS.pop("upper", None)


@pytest.mark.unit
class TestExport:
    """Tests for export()."""

    def test_markdown(self):
        result = export("<p><strong>bold</strong> and <em>italic</em></p>", "md", file_name="notes")
        assert result.content == "**bold** and *italic*"
        assert result.file_name == "notes.md"
        assert result.content_type == "text/markdown"
        assert not result.lossy

    def test_lossy_flag(self):
        result = export('<span style="color:#ff0000">red</span>', "markdown")
        assert result.content == "red"
        assert result.lossy
        assert result.lost_styles == frozenset({"color"})

    def test_plain_text(self):
        result = export("<ol><li>one</li><li>two</li></ol>", "txt")
        assert result.content == "1. one\n2. two"
        assert result.file_name == "document.txt"

    def test_docx_is_bytes(self):
        result = export("<p>x</p>", "docx", file_name="report")
        assert isinstance(result.content, bytes)
        assert result.content[:2] == b"PK"
        assert result.content_type == CONTENT_TYPE_DOCX
        assert result.file_name == "report.docx"

    def test_json(self):
        result = export("<h1>T</h1>", "json", title="Doc")
        data = json.loads(result.content)
        assert data["title"] == "Doc"
        assert [element["kind"] for element in data["elements"]] == ["title", "heading"]

    def test_html(self):
        result = export("<p>x</p>", "html", title="Page")
        assert "<title>Page</title>" in result.content
        assert result.content_type == "text/html"

    def test_bytes_input(self):
        assert export("<p>café</p>".encode("utf-8"), "txt").content == "café"

    def test_file_name_is_sanitized(self):
        assert export("<p>x</p>", "txt", file_name="../secret.md").file_name == "secret.txt"

    @pytest.mark.parametrize("content", ["", "   ", b"", "\n\t"])
    def test_empty_content(self, content):
        with pytest.raises(EmptyInputError):
            export(content, "txt")

    def test_unknown_target_is_checked_first(self):
        with pytest.raises(UnsupportedTargetError):
            export("", "pdf")

    def test_options_for_wrong_target(self):
        with pytest.raises(InvalidOptionsError):
            export("<p>x</p>", "markdown", options=PlainTextOptions())

    def test_options_are_applied(self):
        result = export("<ul><li>x</li></ul>", "markdown", options=MarkdownOptions(bullet="+"))
        assert result.content == "+ x"

    def test_renderer_failure_is_wrapped(self):
        class BrokenRenderer(BaseRenderer):
            def render(self, doc):
                raise KeyError("boom")

        try:
            register_export_target(ExportTarget("broken", "bin", "text/plain", BrokenRenderer))
            with pytest.raises(RenderingError) as exc_info:
                export("<p>x</p>", "broken")
            assert "Failed to generate BROKEN" in str(exc_info.value)
            assert isinstance(exc_info.value.original_error, KeyError)
        finally:
            EXPORT_TARGETS.pop("broken", None)


@pytest.mark.unit
class TestExportResult:
    """Tests for ExportResult helpers."""

    def test_to_bytes(self):
        assert ExportResult("é", "text/plain", "a.txt").to_bytes() == "é".encode("utf-8")
        assert ExportResult(b"\x00", CONTENT_TYPE_DOCX, "a.docx").to_bytes() == b"\x00"

    def test_write_to_directory(self, tmp_path):
        written = ExportResult("hello", "text/plain", "notes.txt").write(tmp_path)
        assert written == tmp_path / "notes.txt"
        assert written.read_text(encoding="utf-8") == "hello"

    def test_write_to_file(self, tmp_path):
        target = tmp_path / "custom.md"
        ExportResult("# x", "text/markdown", "ignored.md").write(target)
        assert target.read_text(encoding="utf-8") == "# x"


@pytest.mark.unit
class TestPackage:
    """Tests for the package surface."""

    def test_version(self):
        assert __version__ == "1.0.0"

    def test_to_document(self):
        doc = to_document("<p>x</p>", title="T")
        assert doc.title == "T"
        assert len(doc.blocks) == 1

    def test_exception_hierarchy(self):
        assert issubclass(EmptyInputError, ValidationError)
        assert issubclass(ValidationError, RichExportError)
        assert issubclass(RenderingError, RichExportError)
        assert str(EmptyInputError()) == "No content provided"
