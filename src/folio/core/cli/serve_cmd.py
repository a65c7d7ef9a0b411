"""folio serve — run the web server with live reload."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from folio.core.utils.logging import DEFAULT_LOG_FILE, setup_logging


@click.command()
@click.option("--content-dir", "-d", default=None, help="Directory of markdown posts.")
@click.option("--host", default=None, help="Bind address (default from config: 127.0.0.1).")
@click.option("--port", "-p", default=None, type=int, help="Bind port (default from config: 8080).")
@click.option("--config", "config_file", default=None, type=click.Path(dir_okay=False), help="YAML or JSON config file.")
@click.option("--no-watch", is_flag=True, help="Disable live reload.")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR.")
@click.option(
    "--log-file",
    is_flag=False,
    flag_value=DEFAULT_LOG_FILE,
    default=None,
    help=f"Also log to a rotating file (bare flag: {DEFAULT_LOG_FILE}).",
)
def serve(
    content_dir: str | None,
    host: str | None,
    port: int | None,
    config_file: str | None,
    no_watch: bool,
    log_level: str | None,
    log_file: str | None,
) -> None:
    """Serve posts over HTTP, reloading when files change."""
    import uvicorn
    from loguru import logger

    from folio.core.cli.common import load_config
    from folio.core.config import as_int
    from folio.core.exceptions import ConfigurationError

    overrides = {
        "content.dir": content_dir,
        "server.host": host,
        "server.port": port,
        "logging.level": log_level,
        "logging.file": log_file,
        "watcher.enabled": False if no_watch else None,
    }
    config = load_config(config_file, overrides)
    setup_logging(level=str(config.get("logging.level", "INFO")), log_file=config.get("logging.file"))

    try:
        app = build_app(config)
        bind_port = as_int(config.get("server.port", 8080), "server.port")
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    bind_host = config.get("server.host", "127.0.0.1")
    logger.info(f"Serving {config.get('content.dir')} on http://{bind_host}:{bind_port}")
    uvicorn.run(app, host=bind_host, port=bind_port, log_level="warning")


def build_app(config):  # type: ignore[no-untyped-def]
    """Initial load, store, optional watcher and the FastAPI app, wired from *config*."""
    from loguru import logger

    from folio.content.config import ContentConfig, WatcherConfig
    from folio.content.loader import load_directory
    from folio.content.store import DocumentStore
    from folio.content.watcher import ContentWatcher
    from folio.core.exceptions import ContentDirectoryError
    from folio.web.app import create_app

    content_dir = config.get("content.dir")
    content_config = ContentConfig.from_config(config)
    watcher_config = WatcherConfig.from_config(config)

    store = DocumentStore()
    directory_ok = True
    try:
        store.replace(load_directory(content_dir, content_config).documents)
    except ContentDirectoryError as e:
        logger.error(f"{e}; serving an empty site with live reload disabled")
        directory_ok = False

    watcher = None
    if directory_ok and watcher_config.enabled:
        watcher = ContentWatcher(
            content_dir,
            store,
            content_config=content_config,
            watcher_config=watcher_config,
            bus=_reload_bus(store),
        )

    return create_app(store, watcher=watcher, static_dir=config.get("server.static_dir"))


def _reload_bus(store):  # type: ignore[no-untyped-def]
    """Event bus whose hooks report what the site is serving after each watcher event."""
    from loguru import logger

    from folio.core.events import CONTENT_RELOADED, WATCHER_STOPPED, Event, EventBus

    def on_reloaded(event: Event) -> None:
        payload = event.payload
        summary = f"Serving generation {payload['generation']} ({payload['documents']} documents)"
        if payload["skipped"]:
            names = ", ".join(Path(p).name for p in payload["skipped"])
            summary += f"; skipped: {names}"
        logger.info(summary)

    def on_stopped(event: Event) -> None:
        logger.warning(
            f"Live reload off ({event.payload['reason']}); "
            f"still serving generation {store.generation} ({len(store)} documents)"
        )

    bus = EventBus()
    bus.on(CONTENT_RELOADED, on_reloaded)
    bus.on(WATCHER_STOPPED, on_stopped)
    return bus
