"""Shared test fixtures for folio."""

import tempfile
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def content_dir(tmp_dir):
    """An empty content directory inside tmp_dir."""
    path = Path(tmp_dir) / "content"
    path.mkdir()
    return path


def _make_post(title: str = "Post", date: str = "2024-01-01", tags=None, body: str = "Body text") -> str:
    lines = ["---", f'title: "{title}"', f'date: "{date}"']
    if tags is not None:
        lines.append(f"tags: [{', '.join(tags)}]")
    lines.append("---")
    return "\n".join(lines) + "\n\n" + textwrap.dedent(body).strip() + "\n"


@pytest.fixture
def write_post(content_dir):
    """Write a post file into content_dir and return its path."""

    def _write(filename: str, **kwargs) -> Path:
        path = content_dir / filename
        path.write_text(_make_post(**kwargs), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def post_text():
    """Builder for source file text: post_text(title=..., date=..., tags=[...], body=...)."""
    return _make_post
