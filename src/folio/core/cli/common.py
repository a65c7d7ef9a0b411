"""Shared setup logic for CLI commands."""

from __future__ import annotations

import sys

import click

from folio.core.config import Config
from folio.core.exceptions import ConfigurationError


def load_config(config_file: str | None = None, overrides: dict | None = None) -> Config:
    """Load config from an optional file plus FOLIO_* env vars, then apply CLI overrides.

    Exits with status 2 on a bad config file.
    """
    try:
        config = Config(config_file=config_file)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    for key_path, value in (overrides or {}).items():
        if value is not None:
            config.set(key_path, value)
    return config
