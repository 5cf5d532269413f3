"""Pytest configuration and shared fixtures for the richexport test suite.

This module provides shared fixtures and test configuration used across
the unit and integration tests.
"""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

from richexport.api import to_document

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, deadline=None, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20, deadline=None)
settings.register_profile(
    "debug",
    max_examples=10,
    deadline=None,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate],
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "docx: Tests that build and re-open Word documents")
    config.addinivalue_line("markers", "server: Tests that exercise the HTTP service")


@pytest.fixture
def editor_html() -> str:
    """A representative editor export touching every block category."""
    return (
        "<h1>Report</h1>"
        "<p><strong>bold</strong> and <em>italic</em> with a <a href='https://example.com'>link</a></p>"
        "<ul><li>one</li><li>two<ul><li>nested</li></ul></li></ul>"
        "<blockquote><p>quoted</p></blockquote>"
        "<pre><code class='language-python'>print('hi')</code></pre>"
        "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"
        "<hr>"
    )


@pytest.fixture
def editor_document(editor_html):
    """The Document built from ``editor_html``."""
    return to_document(editor_html)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every RICHEXPORT_* variable for the duration of a test."""
    for name in list(os.environ):
        if name.startswith("RICHEXPORT_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def restore_logging():
    """Put back the root handlers and logger levels that ``configure_logging`` replaces."""
    from richexport.logging_utils import FOLLOWING_LOGGERS, remove_handlers

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    levels = {name: logging.getLogger(name).level for name in FOLLOWING_LOGGERS}
    yield root
    remove_handlers(root)
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, saved in levels.items():
        logging.getLogger(name).setLevel(saved)
