"""Document parser — one source file in, one ParsedDocument (or nothing) out.

Source files look like::

    ---
    title: "Hello"
    date: 2024-01-01
    tags: [intro, meta]
    ---

    # Hello

    Body text in markdown.

Per-file failures never raise out of :func:`parse`; they are logged and
the file is skipped so a reload can continue with the remaining files.
"""

from __future__ import annotations

import datetime
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from loguru import logger

from folio.core.exceptions import DocumentParseError
from folio.core.utils.file_io import load_front_matter, read_text, split_front_matter

from .models import ParsedDocument
from .render import DEFAULT_EXTENSIONS, render_markdown


def document_id_for(path: str | Path) -> str:
    """Derive a document id from a filename (directory and extension stripped)."""
    return Path(path).stem


def _scalar_text(value: Any) -> str | None:
    """Text form of a YAML scalar, or None if *value* is not a scalar.

    PyYAML resolves unquoted ``1984`` or ``yes`` to int/bool; authors meant text.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _required_string(meta: dict[str, Any], key: str, source: str) -> str:
    if key not in meta or meta[key] is None:
        raise DocumentParseError(source, f"missing required field '{key}'")
    value = meta[key]
    text = _scalar_text(value)
    if text is None:
        raise DocumentParseError(source, f"field '{key}' must be a string, got {type(value).__name__}")
    return text


def _published_at(meta: dict[str, Any], source: str) -> str:
    # YAML turns unquoted 2024-01-01 into a date; keep its ISO form so it still sorts lexically
    value = meta.get("date")
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return _required_string(meta, "date", source)


def _tags(meta: dict[str, Any], source: str) -> frozenset[str] | None:
    value = meta.get("tags")
    if value is None:
        return None
    if not isinstance(value, list):
        raise DocumentParseError(source, f"field 'tags' must be a list of strings, got {type(value).__name__}")
    tags = set()
    for tag in value:
        text = _scalar_text(tag)
        if text is None:
            raise DocumentParseError(source, f"tag {tag!r} is not a string")
        tags.add(text)
    return frozenset(tags)


def parse_text(
    text: str,
    doc_id: str,
    source_path: str = "",
    markdown_extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> ParsedDocument:
    """Parse the full text of a source file.

    Args:
        text: File content.
        doc_id: Identifier to assign to the document.
        source_path: Used for error messages and kept on the document.
        markdown_extensions: Python-Markdown extensions for rendering the body.

    Raises:
        DocumentParseError: Missing metadata block, bad YAML, missing or
            mistyped fields. ``RenderError`` (a subclass) when the body
            fails to render.
    """
    segments = split_front_matter(text)
    if segments is None:
        raise DocumentParseError(source_path, "no front matter block found")
    block, body = segments

    try:
        meta = load_front_matter(block)
    except ValueError as e:
        raise DocumentParseError(source_path, str(e)) from e

    title = _required_string(meta, "title", source_path)
    published_at = _published_at(meta, source_path)
    tags = _tags(meta, source_path)

    raw_body = body.strip()
    rendered = render_markdown(raw_body, markdown_extensions, source=source_path)

    return ParsedDocument(
        id=doc_id,
        title=title,
        published_at=published_at,
        tags=tags,
        raw_body=raw_body,
        rendered_body=rendered,
        source_path=source_path,
    )


def parse(path: str | Path, markdown_extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> ParsedDocument | None:
    """Parse one source file.

    Returns:
        The parsed document, or None if the file could not be read or
        parsed (a warning is logged).
    """
    source = str(path)
    try:
        text = read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Skipping {source}: could not read file ({e})")
        return None

    try:
        return parse_text(text, document_id_for(path), source, markdown_extensions)
    except DocumentParseError as e:
        logger.warning(f"Skipping {source}: {e.reason}")
        return None
