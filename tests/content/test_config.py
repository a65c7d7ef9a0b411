"""Tests for folio.content.config."""

import pytest

from folio.content.config import ContentConfig, WatcherConfig
from folio.core.config import Config
from folio.core.exceptions import ConfigurationError


class TestContentConfig:
    def test_defaults(self):
        config = ContentConfig()
        assert config.extensions == [".md"]
        assert config.include_hidden is False
        assert "fenced_code" in config.markdown_extensions

    def test_extensions_normalized(self):
        config = ContentConfig(extensions=["MD", ".Markdown", " "])
        assert config.extensions == [".md", ".markdown"]

    def test_no_extensions_raises(self):
        with pytest.raises(ConfigurationError):
            ContentConfig(extensions=[])

    def test_from_config_with_env_strings(self):
        config = Config(env_prefix="")
        config.set("content.extensions", ".md,.markdown")
        config.set("content.include_hidden", "true")

        content = ContentConfig.from_config(config)
        assert content.extensions == [".md", ".markdown"]
        assert content.include_hidden is True


class TestWatcherConfig:
    def test_defaults(self):
        config = WatcherConfig()
        assert config.enabled is True
        assert config.debounce_seconds == 0.1

    def test_negative_debounce_raises(self):
        with pytest.raises(ConfigurationError):
            WatcherConfig(debounce_seconds=-1)

    def test_from_config(self):
        config = Config(env_prefix="")
        config.set("watcher.debounce_seconds", "0.5")
        config.set("watcher.enabled", "no")

        watcher = WatcherConfig.from_config(config)
        assert watcher.debounce_seconds == 0.5
        assert watcher.enabled is False

    def test_from_config_bad_number(self):
        config = Config(env_prefix="")
        config.set("watcher.debounce_seconds", "soon")
        with pytest.raises(ConfigurationError, match="debounce_seconds"):
            WatcherConfig.from_config(config)
