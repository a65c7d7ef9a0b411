"""FastAPI dependencies for dependency injection.

The store and watcher live on ``app.state`` (set by ``create_app``), so
each app instance carries its own and tests can build isolated apps.
"""

from __future__ import annotations

from fastapi import Request

from folio.content.store import DocumentStore
from folio.content.watcher import ContentWatcher


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_watcher(request: Request) -> ContentWatcher | None:
    return getattr(request.app.state, "watcher", None)
