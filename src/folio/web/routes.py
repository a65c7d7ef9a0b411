"""HTTP routes: HTML pages and a small JSON API over the content store.

Handlers only read: they take one snapshot per request and never see
reload or parse errors.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from folio.content.query import all_tags, query
from folio.content.store import DocumentStore
from folio.content.watcher import ContentWatcher, WatcherState

from .dependencies import get_store, get_watcher
from .pages import render_index, render_not_found, render_post

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def home(
    q: str | None = None,
    tag: str | None = None,
    store: DocumentStore = Depends(get_store),
) -> HTMLResponse:
    snapshot = store.get_all()
    posts = query(snapshot, free_text=q, tag=tag)
    return HTMLResponse(render_index(posts, all_tags(snapshot), free_text=q, tag=tag))


@router.get("/posts/{doc_id}", response_class=HTMLResponse)
def post_detail(doc_id: str, store: DocumentStore = Depends(get_store)) -> HTMLResponse:
    post = store.get(doc_id)
    if post is None:
        return HTMLResponse(render_not_found(), status_code=404)
    return HTMLResponse(render_post(post))


@router.get("/api/posts")
def list_posts(
    q: str | None = None,
    tag: str | None = None,
    limit: int | None = Query(default=None, ge=0),
    store: DocumentStore = Depends(get_store),
) -> list[dict]:
    return [doc.to_dict() for doc in query(store.get_all(), free_text=q, tag=tag, limit=limit)]


@router.get("/api/posts/{doc_id}")
def get_post(doc_id: str, store: DocumentStore = Depends(get_store)) -> dict:
    post = store.get(doc_id)
    if post is None:
        raise HTTPException(status_code=404, detail=f"Post not found: {doc_id}")
    return post.to_dict()


@router.get("/api/tags")
def list_tags(store: DocumentStore = Depends(get_store)) -> list[str]:
    return all_tags(store.get_all())


@router.get("/healthz")
def health(
    store: DocumentStore = Depends(get_store),
    watcher: ContentWatcher | None = Depends(get_watcher),
) -> dict:
    state = watcher.state if watcher is not None else WatcherState.STOPPED
    return {
        "status": "ok",
        "documents": len(store),
        "generation": store.generation,
        "watcher": state.value,
    }
