"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from loguru import logger

from folio import __version__
from folio.content.store import DocumentStore
from folio.content.watcher import ContentWatcher

from .routes import router


def create_app(
    store: DocumentStore,
    watcher: ContentWatcher | None = None,
    static_dir: str | Path | None = None,
) -> FastAPI:
    """Create the web app around an existing store.

    Args:
        store: Store the handlers read from.
        watcher: Started on startup and stopped on shutdown when given.
        static_dir: Served under ``/static`` if the directory exists.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if watcher is not None:
            watcher.start()
        yield
        if watcher is not None:
            await watcher.stop()

    app = FastAPI(title="Folio", version=__version__, lifespan=lifespan)
    app.state.store = store
    app.state.watcher = watcher

    if static_dir is not None and Path(static_dir).is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    elif static_dir is not None:
        logger.debug(f"No static directory at {static_dir}; /static not mounted")

    app.include_router(router)
    return app
