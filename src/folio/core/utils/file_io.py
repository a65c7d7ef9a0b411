"""
File I/O utilities: source reading and front matter handling.

All functions operate on explicit paths or text — no implicit directory lookups.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

FRONT_MATTER_DELIMITER = "---"


def read_text(path: str | Path, encoding: str = "utf-8") -> str:
    """Read a whole file as text. Raises OSError / UnicodeDecodeError."""
    with open(path, encoding=encoding) as f:
        return f.read()


def split_front_matter(content: str) -> tuple[str, str] | None:
    """
    Split raw file content into its front matter block and body.

    The content is split on the ``---`` delimiter into at most three
    segments: a preamble (ignored, normally empty), the metadata block and
    the body. Later delimiters stay inside the body.

    Returns:
        (front_matter_text, body_text), or None when fewer than three
        segments exist (no metadata block).
    """
    parts = content.split(FRONT_MATTER_DELIMITER, 2)
    if len(parts) < 3:
        return None
    return parts[1], parts[2]


def load_front_matter(block: str) -> dict[str, Any]:
    """
    Decode a YAML front matter block into a dict.

    Raises:
        ValueError: If the block is not valid YAML or is not a mapping.
    """
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise ValueError(f"invalid YAML front matter: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"front matter must be a mapping, got {type(data).__name__}")
    return data
