"""Configuration dataclasses for content loading and live reload.

These are pure data containers with sensible defaults.
Override them from YAML config, env vars, or constructor args.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from folio.core.config import as_bool, as_float, as_list
from folio.core.exceptions import ConfigurationError


@dataclass
class ContentConfig:
    """Settings for scanning and parsing the content directory.

    Attributes:
        extensions: File suffixes treated as source documents.
        include_hidden: Whether dot-files are scanned (editor swap files usually are not wanted).
        markdown_extensions: Python-Markdown extensions applied when rendering bodies.
    """

    extensions: list[str] = field(default_factory=lambda: [".md"])
    include_hidden: bool = False
    markdown_extensions: list[str] = field(default_factory=lambda: ["fenced_code", "tables"])

    def __post_init__(self):
        normalized = []
        for ext in self.extensions:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        if not normalized:
            raise ConfigurationError("content.extensions must name at least one file suffix")
        self.extensions = normalized

    @classmethod
    def from_config(cls, config: Any) -> ContentConfig:
        """Build from a :class:`folio.core.config.Config`."""
        return cls(
            extensions=as_list(config.get("content.extensions", [".md"])),
            include_hidden=as_bool(config.get("content.include_hidden", False), "content.include_hidden"),
            markdown_extensions=as_list(config.get("content.markdown_extensions", ["fenced_code", "tables"])),
        )


@dataclass
class WatcherConfig:
    """Settings for the change watcher.

    Attributes:
        enabled: Whether live reload runs at all.
        debounce_seconds: Quiet period after the last filesystem event before a reload starts.
    """

    enabled: bool = True
    debounce_seconds: float = 0.1

    def __post_init__(self):
        if self.debounce_seconds < 0:
            raise ConfigurationError("watcher.debounce_seconds must not be negative")

    @classmethod
    def from_config(cls, config: Any) -> WatcherConfig:
        """Build from a :class:`folio.core.config.Config`."""
        return cls(
            enabled=as_bool(config.get("watcher.enabled", True), "watcher.enabled"),
            debounce_seconds=as_float(config.get("watcher.debounce_seconds", 0.1), "watcher.debounce_seconds"),
        )
