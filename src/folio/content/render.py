"""Markdown to HTML rendering.

A thin wrapper over Python-Markdown. Rendering is a pure function of the
body text and the extension list; a fresh ``Markdown`` instance is built
per call because instances keep per-document state.
"""

from __future__ import annotations

from collections.abc import Sequence

import markdown

from folio.core.exceptions import RenderError

DEFAULT_EXTENSIONS: tuple[str, ...] = ("fenced_code", "tables")


def render_markdown(text: str, extensions: Sequence[str] = DEFAULT_EXTENSIONS, *, source: str = "") -> str:
    """Render markdown *text* to an HTML fragment.

    Raises:
        RenderError: If Python-Markdown cannot load an extension or fails on the input.
    """
    try:
        md = markdown.Markdown(extensions=list(extensions), output_format="html")
        return md.convert(text)
    except Exception as e:
        raise RenderError(source, f"markdown rendering failed: {e}") from e
