"""Directory scan — rebuild a complete DocumentSet from the content directory.

Every reload goes through :func:`load_directory`; there is no incremental
update path. Files are parsed in sorted filename order so that id
collisions (``post.md`` next to ``post.MD``) resolve the same way on
every file system: the last file parsed wins, and the collision is logged.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from folio.core.exceptions import ContentDirectoryError

from .config import ContentConfig
from .models import DocumentSet, LoadResult, ParsedDocument
from .parser import parse


def is_source_file(path: str | Path, extensions: list[str], include_hidden: bool = False) -> bool:
    """Whether *path* names a file the loader would parse (suffix and dot-file check only)."""
    p = Path(path)
    if not include_hidden and p.name.startswith("."):
        return False
    return p.suffix.lower() in extensions


def list_source_files(
    content_dir: str | Path,
    extensions: list[str],
    include_hidden: bool = False,
) -> list[Path]:
    """List source files directly inside *content_dir*, sorted by name.

    Raises:
        ContentDirectoryError: If the directory is missing, not a directory, or unreadable.
    """
    root = Path(content_dir)
    if not root.exists():
        raise ContentDirectoryError(str(root), "does not exist")
    if not root.is_dir():
        raise ContentDirectoryError(str(root), "is not a directory")

    try:
        entries = list(root.iterdir())
    except OSError as e:
        raise ContentDirectoryError(str(root), str(e)) from e

    files = [p for p in entries if is_source_file(p, extensions, include_hidden) and p.is_file()]
    return sorted(files, key=lambda p: p.name)


def load_directory(content_dir: str | Path, config: ContentConfig | None = None) -> LoadResult:
    """Parse every source file in *content_dir* into a fresh DocumentSet.

    Per-file failures are skipped and reported in ``LoadResult.skipped``.

    Raises:
        ContentDirectoryError: If the directory itself cannot be listed.
    """
    config = config or ContentConfig()
    paths = list_source_files(content_dir, config.extensions, config.include_hidden)

    documents: dict[str, ParsedDocument] = {}
    seen: dict[str, list[str]] = {}
    skipped: list[str] = []

    for path in paths:
        doc = parse(path, config.markdown_extensions)
        if doc is None:
            skipped.append(str(path))
            continue
        seen.setdefault(doc.id, []).append(str(path))
        documents[doc.id] = doc

    collisions = {doc_id: sources for doc_id, sources in seen.items() if len(sources) > 1}
    for doc_id, sources in collisions.items():
        logger.warning(f"Document id '{doc_id}' produced by {len(sources)} files {sources}; using {sources[-1]}")

    logger.info(f"Loaded {len(documents)} documents from {content_dir} ({len(skipped)} skipped)")
    return LoadResult(documents=DocumentSet(documents), skipped=skipped, collisions=collisions)
