"""Query engine — filter and order a DocumentSet snapshot.

Pure functions over a snapshot: no I/O, no store access. Free text is a
case-insensitive substring match on title or body; tags match exactly.
"""

from __future__ import annotations

from .models import DocumentSet, ParsedDocument


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _matches_text(doc: ParsedDocument, needle: str) -> bool:
    return needle in doc.title.casefold() or needle in doc.raw_body.casefold()


def sort_documents(documents: list[ParsedDocument]) -> list[ParsedDocument]:
    """Newest first by ``published_at``; ties by ``id`` ascending."""
    by_id = sorted(documents, key=lambda d: d.id)
    return sorted(by_id, key=lambda d: d.published_at, reverse=True)


def query(
    snapshot: DocumentSet,
    free_text: str | None = None,
    tag: str | None = None,
    limit: int | None = None,
) -> list[ParsedDocument]:
    """Filter *snapshot* by free text and/or tag.

    Args:
        snapshot: Documents to search.
        free_text: Substring to find in title or body (case-insensitive).
            None or blank means no text filter.
        tag: Exact, case-sensitive tag to require. None or blank means no tag filter.
        limit: Maximum number of results, applied after sorting.

    Returns:
        Matching documents sorted by date descending, then id ascending.
    """
    results = snapshot.documents()
    if not _is_blank(free_text):
        needle = free_text.strip().casefold()
        results = [d for d in results if _matches_text(d, needle)]
    if not _is_blank(tag):
        # tags compare exactly as given; only the blank check ignores whitespace
        results = [d for d in results if d.has_tag(tag)]

    results = sort_documents(results)
    if limit is not None:
        results = results[: max(limit, 0)]
    return results


def all_tags(snapshot: DocumentSet) -> list[str]:
    """Distinct tags across every document, sorted ascending."""
    tags: set[str] = set()
    for doc in snapshot.values():
        if doc.tags:
            tags.update(doc.tags)
    return sorted(tags)
