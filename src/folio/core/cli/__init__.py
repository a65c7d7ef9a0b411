"""Folio CLI — entry point for serve and check commands."""

import click

from folio import __version__


@click.group()
@click.version_option(version=__version__, package_name="folio")
def main() -> None:
    """Folio — serve a directory of markdown posts with live reload."""


# Register subcommands (lazy imports keep startup fast)
from .check_cmd import check  # noqa: E402
from .serve_cmd import serve  # noqa: E402

main.add_command(serve)
main.add_command(check)
