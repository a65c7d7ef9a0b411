"""Core data models for the content store.

A ``ParsedDocument`` is one source file after parsing and rendering.
A ``DocumentSet`` is an immutable, point-in-time mapping of every
document by id; reloads build a new one rather than editing the old.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class ParsedDocument:
    """A parsed and rendered source document.

    Attributes:
        id: Stable identifier derived from the filename stem.
        title: Document title from front matter.
        published_at: Sortable date string (ISO-like, compared lexically).
        tags: Tag set, or None when the front matter has no tags.
        raw_body: Trimmed markdown body.
        rendered_body: HTML rendered from ``raw_body``.
        source_path: File the document was parsed from.
    """

    id: str
    title: str
    published_at: str
    tags: frozenset[str] | None = None
    raw_body: str = ""
    rendered_body: str = ""
    source_path: str = field(default="", compare=False)

    def __post_init__(self):
        if not self.id:
            raise ValueError("Document id must be a non-empty string")

    def has_tag(self, tag: str) -> bool:
        return self.tags is not None and tag in self.tags

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dict (tags sorted, or None)."""
        return {
            "id": self.id,
            "title": self.title,
            "published_at": self.published_at,
            "tags": sorted(self.tags) if self.tags is not None else None,
            "raw_body": self.raw_body,
            "rendered_body": self.rendered_body,
        }

    def __repr__(self) -> str:
        return f"ParsedDocument(id='{self.id}', title='{self.title}', published_at='{self.published_at}')"


class DocumentSet(Mapping[str, ParsedDocument]):
    """Immutable mapping from document id to :class:`ParsedDocument`.

    Built wholesale from an iterable of documents (later documents with the
    same id replace earlier ones) or from an existing mapping.
    """

    __slots__ = ("_documents",)

    def __init__(self, documents: Iterable[ParsedDocument] | Mapping[str, ParsedDocument] = ()):
        if isinstance(documents, Mapping):
            items = dict(documents)
        else:
            items = {}
            for doc in documents:
                items[doc.id] = doc
        self._documents: Mapping[str, ParsedDocument] = MappingProxyType(items)

    def __getitem__(self, doc_id: str) -> ParsedDocument:
        return self._documents[doc_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def documents(self) -> list[ParsedDocument]:
        """All documents, in insertion order."""
        return list(self._documents.values())

    def __repr__(self) -> str:
        return f"DocumentSet({len(self)} documents)"


@dataclass
class LoadResult:
    """Outcome of one full directory scan.

    Attributes:
        documents: The freshly built document set.
        skipped: Paths of files that failed to parse.
        collisions: Document id -> every path that produced it, in parse order.
    """

    documents: DocumentSet
    skipped: list[str] = field(default_factory=list)
    collisions: dict[str, list[str]] = field(default_factory=dict)

    @property
    def loaded_count(self) -> int:
        return len(self.documents)
