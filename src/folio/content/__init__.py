"""Live content store.

Parses markdown files with YAML front matter into immutable document
snapshots, serves them from a thread-safe store, keeps the store fresh
with a debounced directory watcher, and filters snapshots by text and tag.
"""

from .config import ContentConfig, WatcherConfig
from .loader import list_source_files, load_directory
from .models import DocumentSet, LoadResult, ParsedDocument
from .parser import parse, parse_text
from .query import all_tags, query
from .store import DocumentStore
from .watcher import ContentWatcher, WatcherState

__all__ = [
    "ContentConfig",
    "ContentWatcher",
    "DocumentSet",
    "DocumentStore",
    "LoadResult",
    "ParsedDocument",
    "WatcherConfig",
    "WatcherState",
    "all_tags",
    "list_source_files",
    "load_directory",
    "parse",
    "parse_text",
    "query",
]
