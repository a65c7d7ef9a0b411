"""folio check — parse the content directory once and report problems."""

from __future__ import annotations

import sys

import click


@click.command()
@click.option("--content-dir", "-d", default=None, help="Directory of markdown posts.")
@click.option("--config", "config_file", default=None, type=click.Path(dir_okay=False), help="YAML or JSON config file.")
def check(content_dir: str | None, config_file: str | None) -> None:
    """Parse every post and list skipped files and id collisions."""
    from folio.content.config import ContentConfig
    from folio.content.loader import load_directory
    from folio.core.cli.common import load_config
    from folio.core.exceptions import ConfigurationError, ContentDirectoryError

    config = load_config(config_file, {"content.dir": content_dir})
    directory = config.get("content.dir")

    try:
        result = load_directory(directory, ContentConfig.from_config(config))
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)
    except ContentDirectoryError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    click.echo(f"{result.loaded_count} documents loaded from {directory}")
    for path in result.skipped:
        click.echo(f"  skipped: {path}")
    for doc_id, paths in sorted(result.collisions.items()):
        click.echo(f"  id collision '{doc_id}': {', '.join(paths)} (using {paths[-1]})")
