"""DocumentStore — the single source of truth for reads.

Holds exactly one immutable :class:`DocumentSet`. Readers get the current
snapshot; the watcher publishes a new one with :meth:`DocumentStore.replace`.
The lock covers only the reference read/swap, never parsing, so readers
wait at most for the instant of publication.
"""

from __future__ import annotations

import threading

from .models import DocumentSet, ParsedDocument


class DocumentStore:
    """Thread-safe holder of the current document snapshot.

    Example::

        store = DocumentStore()
        store.replace(load_directory("content").documents)
        snapshot = store.get_all()   # stays valid after later reloads
        post = store.get("hello-world")
    """

    def __init__(self, initial: DocumentSet | None = None) -> None:
        self._lock = threading.Lock()
        self._snapshot = initial if initial is not None else DocumentSet()
        self._generation = 0

    def get_all(self) -> DocumentSet:
        """Return the current snapshot."""
        with self._lock:
            return self._snapshot

    def get(self, doc_id: str) -> ParsedDocument | None:
        """Look up a document in the current snapshot; None if absent."""
        return self.get_all().get(doc_id)

    def replace(self, new_set: DocumentSet) -> None:
        """Atomically publish *new_set* as the current snapshot."""
        if not isinstance(new_set, DocumentSet):
            raise TypeError(f"replace() expects a DocumentSet, got {type(new_set).__name__}")
        with self._lock:
            self._snapshot = new_set
            self._generation += 1

    @property
    def generation(self) -> int:
        """Number of completed replaces."""
        with self._lock:
            return self._generation

    def __len__(self) -> int:
        return len(self.get_all())
