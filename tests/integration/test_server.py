#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_server.py
"""Integration tests for the HTTP export service.

Tests cover:
- Health endpoint
- Successful exports and response headers
- Request validation and error responses

"""

from io import BytesIO

import pytest
from docx import Document as DocxDocument

from richexport.config import ServiceConfig
from richexport.constants import CONTENT_TYPE_DOCX
from richexport.server import create_app


@pytest.fixture
def client():
    app = create_app(ServiceConfig(max_content_bytes=4096))
    app.config["TESTING"] = True
    return app.test_client()


@pytest.mark.integration
@pytest.mark.server
class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}


@pytest.mark.integration
@pytest.mark.server
class TestExport:
    """Tests for successful exports."""

    def test_markdown_export(self, client):
        response = client.post(
            "/api/export/markdown",
            json={"content": "<p><strong>bold</strong> and <em>italic</em></p>", "fileName": "notes"},
        )
        assert response.status_code == 200
        assert response.get_data(as_text=True) == "**bold** and *italic*"
        assert response.headers["Content-Type"] == "text/markdown; charset=utf-8"
        assert response.headers["Content-Disposition"] == 'attachment; filename="notes.md"'
        assert response.headers["X-Export-Lossy"] == "false"

    def test_alias_and_default_file_name(self, client):
        response = client.post("/api/export/text", json={"content": "<p>x</p>"})
        assert response.status_code == 200
        assert response.headers["Content-Disposition"] == 'attachment; filename="document.txt"'

    def test_lossy_header(self, client):
        response = client.post("/api/export/txt", json={"content": "<p><mark>hot</mark></p>"})
        assert response.get_data(as_text=True) == "hot"
        assert response.headers["X-Export-Lossy"] == "true"

    def test_docx_export(self, client):
        response = client.post("/api/export/docx", json={"content": "<p>Hello</p>", "title": "Report"})
        assert response.status_code == 200
        assert response.headers["Content-Type"] == CONTENT_TYPE_DOCX
        document = DocxDocument(BytesIO(response.data))
        assert [p.text for p in document.paragraphs] == ["Report", "Hello"]

    def test_json_export(self, client):
        response = client.post("/api/export/json", json={"content": "<p>x</p>"})
        assert response.status_code == 200
        assert response.get_json()["elements"][0]["kind"] == "paragraph"

    def test_html_export(self, client):
        response = client.post("/api/export/html", json={"content": "<p>x</p>", "title": "Page"})
        body = response.get_data(as_text=True)
        assert "<title>Page</title>" in body
        assert "<p>x</p>" in body

    def test_non_ascii_file_name(self, client):
        response = client.post("/api/export/txt", json={"content": "<p>x</p>", "fileName": "résumé"})
        disposition = response.headers["Content-Disposition"]
        assert 'filename="rsum.txt"' in disposition
        assert "filename*=UTF-8''r%C3%A9sum%C3%A9.txt" in disposition


@pytest.mark.integration
@pytest.mark.server
class TestErrors:
    """Tests for error responses."""

    def test_unknown_target(self, client):
        response = client.post("/api/export/pdf", json={"content": "<p>x</p>"})
        assert response.status_code == 404
        assert "pdf" in response.get_json()["error"]

    @pytest.mark.parametrize("payload", [{}, {"content": None}, {"content": 5}, {"fileName": "x"}])
    def test_missing_content(self, client, payload):
        response = client.post("/api/export/txt", json=payload)
        assert response.status_code == 400
        assert response.get_json() == {"error": "No content provided"}

    def test_empty_content(self, client):
        response = client.post("/api/export/markdown", json={"content": "   "})
        assert response.status_code == 400
        assert response.get_json() == {"error": "No content provided"}

    def test_non_json_body(self, client):
        response = client.post("/api/export/txt", data="<p>x</p>", content_type="text/html")
        assert response.status_code == 400

    def test_json_list_body(self, client):
        response = client.post("/api/export/txt", json=["<p>x</p>"])
        assert response.status_code == 400

    def test_non_string_title(self, client):
        response = client.post("/api/export/txt", json={"content": "<p>x</p>", "title": 3})
        assert response.status_code == 400
        assert response.get_json() == {"error": "fileName and title must be strings"}

    def test_content_too_large(self, client):
        response = client.post("/api/export/txt", json={"content": "<p>" + "x" * 5000 + "</p>"})
        assert response.status_code == 413
        assert response.get_json() == {"error": "Content exceeds the 4096 byte limit"}

    def test_get_not_allowed(self, client):
        assert client.get("/api/export/txt").status_code == 405
