"""
Pytest Configuration for SREST Tests

Ensures proper import paths for the srest package during testing and
provides shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add the parent directory to sys.path to ensure proper imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from srest import DEFAULT_FUNC_MAP, Server, ViewStore  # noqa: E402
from srest.config import Config  # noqa: E402


class QuietConfig(Config):
    """Config without the startup banner."""
    VERBOSE_LOGGING = False


@pytest.fixture
def config():
    return QuietConfig


@pytest.fixture
def server(config):
    """Server whose listener, if started, is closed after the test."""
    s = Server(config=config)
    yield s
    s.close()


@pytest.fixture
def views_dir(tmp_path):
    """Template tree with a layout, a page and a nested partial."""
    root = tmp_path / "views"
    (root / "partials").mkdir(parents=True)
    (root / "index.html").write_text('{{ cap("i am lowercase") }}-eqs:{{ eqs(1, "1") }}')
    (root / "layout.html").write_text("<main>{% block body %}{% endblock %}</main>")
    (root / "page.html").write_text(
        '{% extends "layout.html" %}{% block body %}{% include "partials/hello.html" %}{% endblock %}'
    )
    (root / "partials" / "hello.html").write_text("Hello {{ name }}")
    (root / "notes.txt").write_text("not a template")
    return root


@pytest.fixture
def views(views_dir):
    store = ViewStore()
    store.load(str(views_dir), DEFAULT_FUNC_MAP)
    return store
