#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_cli.py
"""Integration tests for the richexport command line."""

import io
import sys
from io import BytesIO

import pytest
from docx import Document as DocxDocument

from richexport.cli import EXIT_SUCCESS, EXIT_VALIDATION_ERROR, main


@pytest.fixture(autouse=True)
def _restore_logging(restore_logging):
    """``main`` reconfigures logging on every call."""
    yield


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "page.html"
    path.write_text("<h2>Notes</h2><p><strong>bold</strong> and <em>italic</em></p>", encoding="utf-8")
    return path


@pytest.mark.integration
class TestConvert:
    """Tests for the convert command."""

    def test_markdown_to_stdout(self, page, capsys):
        assert main(["convert", str(page)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "## Notes\n\n**bold** and *italic*\n"

    def test_text_target(self, page, capsys):
        assert main(["convert", str(page), "--to", "txt"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "Notes\n\nbold and italic\n"

    def test_output_file(self, page, tmp_path):
        output = tmp_path / "out.md"
        assert main(["convert", str(page), "-o", str(output)]) == EXIT_SUCCESS
        assert output.read_text(encoding="utf-8") == "## Notes\n\n**bold** and *italic*"

    def test_output_directory_uses_input_name(self, page, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        assert main(["convert", str(page), "-t", "html", "-o", str(out_dir)]) == EXIT_SUCCESS
        assert "<h2>Notes</h2>" in (out_dir / "page.html").read_text(encoding="utf-8")

    def test_output_directory_with_name(self, page, tmp_path):
        assert main(["convert", str(page), "-t", "txt", "-o", str(tmp_path), "--name", "summary"]) == EXIT_SUCCESS
        assert (tmp_path / "summary.txt").exists()

    def test_docx_output(self, page, tmp_path):
        output = tmp_path / "page.docx"
        assert main(["convert", str(page), "-t", "docx", "--title", "Report", "-o", str(output)]) == EXIT_SUCCESS
        document = DocxDocument(BytesIO(output.read_bytes()))
        assert document.paragraphs[0].text == "Report"

    def test_docx_requires_output(self, page, capsys):
        assert main(["convert", str(page), "-t", "docx"]) == EXIT_VALIDATION_ERROR
        assert "--output is required" in capsys.readouterr().err

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO("<ul><li>a</li><li>b</li></ul>"))
        assert main(["convert", "-", "-t", "txt"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "• a\n• b\n"

    def test_missing_file(self, tmp_path, capsys):
        assert main(["convert", str(tmp_path / "nope.html")]) == EXIT_VALIDATION_ERROR
        assert "cannot read" in capsys.readouterr().err

    def test_empty_file(self, tmp_path, capsys):
        empty = tmp_path / "empty.html"
        empty.write_text("  \n", encoding="utf-8")
        assert main(["convert", str(empty)]) == EXIT_VALIDATION_ERROR
        assert "No content provided" in capsys.readouterr().err

    def test_lossy_warning(self, tmp_path, capsys):
        colored = tmp_path / "colored.html"
        colored.write_text('<p><span style="color:#ff0000">red</span></p>', encoding="utf-8")
        assert main(["convert", str(colored)]) == EXIT_SUCCESS
        captured = capsys.readouterr()
        assert captured.out == "red\n"
        assert "Warning: markdown output cannot represent: color" in captured.err

    def test_unknown_target(self, page):
        assert main(["convert", str(page), "-t", "pdf"]) == EXIT_VALIDATION_ERROR


@pytest.mark.integration
class TestServe:
    """Tests for the serve command."""

    def test_serve_passes_config(self, monkeypatch, clean_env):
        calls = []
        monkeypatch.setattr(
            "richexport.server.run_server",
            lambda config, log_file=None, trace_mode=False: calls.append((config, log_file, trace_mode)),
        )
        assert main(["--trace", "serve", "--port", "9100", "--debug"]) == EXIT_SUCCESS
        config, log_file, trace_mode = calls[0]
        assert config.port == 9100
        assert config.debug is True
        assert config.host == "127.0.0.1"
        assert log_file is None
        assert trace_mode is True

    def test_environment_is_used(self, monkeypatch, clean_env):
        calls = []
        monkeypatch.setattr("richexport.server.run_server", lambda config, **kwargs: calls.append(config))
        clean_env.setenv("RICHEXPORT_HOST", "0.0.0.0")
        assert main(["serve"]) == EXIT_SUCCESS
        assert calls[0].host == "0.0.0.0"
        assert calls[0].debug is False

    def test_invalid_environment(self, monkeypatch, clean_env, capsys):
        monkeypatch.setattr("richexport.server.run_server", lambda config, **kwargs: None)
        clean_env.setenv("RICHEXPORT_PORT", "eighty")
        assert main(["serve"]) == EXIT_VALIDATION_ERROR
        assert "RICHEXPORT_PORT" in capsys.readouterr().err

    def test_invalid_port_argument(self):
        assert main(["serve", "--port", "0"]) == EXIT_VALIDATION_ERROR


@pytest.mark.integration
class TestParser:
    """Tests for top-level parser behavior."""

    def test_version(self, capsys):
        assert main(["--version"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("richexport ")

    def test_command_required(self):
        assert main([]) == EXIT_VALIDATION_ERROR
