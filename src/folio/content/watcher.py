"""Change watcher — debounced live reload of the content directory.

A watchdog ``Observer`` thread reports filesystem changes; each qualifying
change is handed to the event loop with ``call_soon_threadsafe`` and lands
in an ``asyncio.Queue``. A single consumer task runs the state machine::

    IDLE --event--> PENDING_DEBOUNCE --quiet window--> RELOADING --> IDLE
                         ^      |
                         +event-+  (window restarts)

Bursts of events inside the window collapse into one reload. The reload
itself (directory scan + parse) runs in a worker thread and publishes the
result with ``DocumentStore.replace``; nothing else touches the store.

If the directory disappears or cannot be watched, the watcher logs, stops
and leaves the last good snapshot in the store.
"""

from __future__ import annotations

import asyncio
import os
from enum import Enum
from pathlib import Path
from typing import Any

from loguru import logger
from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from folio.core.events import CONTENT_RELOADED, WATCHER_STOPPED, Event, EventBus
from folio.core.exceptions import ContentDirectoryError

from .config import ContentConfig, WatcherConfig
from .loader import is_source_file, load_directory
from .models import LoadResult
from .store import DocumentStore

_QUALIFYING_EVENTS = frozenset({EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED})

_STOP = object()


class WatcherState(Enum):
    """Lifecycle states of :class:`ContentWatcher`."""

    IDLE = "idle"
    PENDING_DEBOUNCE = "pending_debounce"
    RELOADING = "reloading"
    STOPPED = "stopped"


class _ContentEventHandler(FileSystemEventHandler):
    """Forwards qualifying watchdog events to the watcher (runs on the observer thread)."""

    def __init__(self, watcher: ContentWatcher):
        super().__init__()
        self._watcher = watcher

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in _QUALIFYING_EVENTS:
            return

        src = os.fsdecode(event.src_path)
        if event.is_directory:
            # Only the content directory itself going away matters
            if event.event_type in (EVENT_TYPE_DELETED, EVENT_TYPE_MOVED) and self._watcher.is_content_dir(src):
                self._watcher.notify(src)
            return

        dest = os.fsdecode(getattr(event, "dest_path", "") or "")
        for path in (src, dest):
            if path and self._watcher.is_source_path(path):
                self._watcher.notify(path)
                return


class ContentWatcher:
    """Debounced reload loop for one content directory.

    Args:
        content_dir: Directory to watch (non-recursive).
        store: Store that receives each new snapshot.
        content_config: Which files count as sources and how to render them.
        watcher_config: Debounce window.
        bus: Optional event bus; receives ``content.reloaded`` and ``watcher.stopped``.
        watch_filesystem: When False no observer is started and changes are
            only reported through :meth:`notify`.
    """

    def __init__(
        self,
        content_dir: str | Path,
        store: DocumentStore,
        *,
        content_config: ContentConfig | None = None,
        watcher_config: WatcherConfig | None = None,
        bus: EventBus | None = None,
        watch_filesystem: bool = True,
    ):
        self._content_dir = Path(content_dir)
        self._store = store
        self._content_config = content_config or ContentConfig()
        self._watcher_config = watcher_config or WatcherConfig()
        self._bus = bus
        self._watch_filesystem = watch_filesystem

        self._state = WatcherState.STOPPED
        self._loop: asyncio.AbstractEventLoop | None = None
        self._queue: asyncio.Queue[Any] | None = None
        self._task: asyncio.Task | None = None
        self._observer: Any = None
        self._reload_lock = asyncio.Lock()

        self.reload_count = 0
        self.last_result: LoadResult | None = None

    # ── Introspection ──────────────────────────────────────────────

    @property
    def state(self) -> WatcherState:
        return self._state

    @property
    def content_dir(self) -> Path:
        return self._content_dir

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def bus(self) -> EventBus | None:
        return self._bus

    def is_source_path(self, path: str | Path) -> bool:
        """Whether a change to *path* should trigger a reload."""
        return is_source_file(path, self._content_config.extensions, self._content_config.include_hidden)

    def is_content_dir(self, path: str | Path) -> bool:
        return os.path.abspath(path) == os.path.abspath(self._content_dir)

    # ── Lifecycle ──────────────────────────────────────────────────

    def start(self) -> bool:
        """Subscribe to filesystem events and start the consumer task.

        Must be called from a running event loop.

        Returns:
            True if the watcher is running, False if the directory could not
            be watched (the watcher stays STOPPED; served content is unaffected).
        """
        if self.is_running:
            logger.warning("ContentWatcher already running")
            return True

        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()

        if self._watch_filesystem and not self._start_observer():
            self._state = WatcherState.STOPPED
            return False

        self._state = WatcherState.IDLE
        self._task = asyncio.create_task(self._run(), name="content-watcher")
        logger.info(f"Watching {self._content_dir} (debounce {self._watcher_config.debounce_seconds}s)")
        return True

    async def stop(self) -> None:
        """Stop watching. A pending debounce is dropped; an in-flight reload finishes first."""
        await self._stop_observer()
        if self._task is not None:
            if not self._task.done() and self._queue is not None:
                self._queue.put_nowait(_STOP)
            await self._task
            self._task = None
            logger.info("ContentWatcher stopped")
        self._state = WatcherState.STOPPED

    def notify(self, path: str | Path = "") -> None:
        """Report a change. Safe to call from any thread."""
        loop, queue = self._loop, self._queue
        if loop is None or queue is None or self._state is WatcherState.STOPPED:
            return
        try:
            loop.call_soon_threadsafe(queue.put_nowait, str(path))
        except RuntimeError:
            logger.debug(f"Dropped change event for {path}: event loop closed")

    # ── Reload ─────────────────────────────────────────────────────

    async def reload(self) -> LoadResult:
        """Rescan the directory now and publish the result.

        Raises:
            ContentDirectoryError: If the directory cannot be listed; the
                store keeps its current snapshot.
        """
        async with self._reload_lock:
            result = await asyncio.to_thread(load_directory, self._content_dir, self._content_config)
            self._store.replace(result.documents)
            self.reload_count += 1
            self.last_result = result

        logger.info(
            f"Reload #{self.reload_count}: {result.loaded_count} documents, "
            f"{len(result.skipped)} skipped, {len(result.collisions)} id collisions"
        )
        if self._bus is not None:
            await self._bus.emit(
                Event(
                    name=CONTENT_RELOADED,
                    payload={
                        "generation": self._store.generation,
                        "documents": result.loaded_count,
                        "skipped": list(result.skipped),
                        "collisions": dict(result.collisions),
                    },
                    source="watcher",
                )
            )
        return result

    # ── Internal ───────────────────────────────────────────────────

    def _start_observer(self) -> bool:
        if not self._content_dir.is_dir():
            logger.error(f"Live reload disabled: {self._content_dir} is not a directory")
            return False

        observer = Observer()
        try:
            observer.schedule(_ContentEventHandler(self), str(self._content_dir), recursive=False)
            observer.start()
        except OSError as e:
            logger.error(f"Live reload disabled: cannot watch {self._content_dir}: {e}")
            return False

        self._observer = observer
        return True

    async def _stop_observer(self) -> None:
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        await asyncio.to_thread(observer.join, 5.0)

    async def _debounce(self) -> bool:
        """Wait for a quiet window. Returns False if a stop request arrived instead."""
        assert self._queue is not None
        while True:
            try:
                item = await asyncio.wait_for(self._queue.get(), timeout=self._watcher_config.debounce_seconds)
            except asyncio.TimeoutError:
                return True
            if item is _STOP:
                return False
            logger.debug(f"Change to {item}; debounce window restarted")

    async def _run(self) -> None:
        assert self._queue is not None
        while True:
            self._state = WatcherState.IDLE
            item = await self._queue.get()
            if item is _STOP:
                break

            self._state = WatcherState.PENDING_DEBOUNCE
            logger.debug(f"Change to {item}; waiting for quiet window")
            if not await self._debounce():
                break

            self._state = WatcherState.RELOADING
            try:
                await self.reload()
            except ContentDirectoryError as e:
                logger.error(f"Live reload disabled: {e}")
                await self._halt(str(e))
                return
            except Exception:
                logger.exception("Reload failed; keeping previous snapshot")

        self._state = WatcherState.STOPPED

    async def _halt(self, reason: str) -> None:
        await self._stop_observer()
        self._state = WatcherState.STOPPED
        if self._bus is not None:
            await self._bus.emit(Event(name=WATCHER_STOPPED, payload={"reason": reason}, source="watcher"))
