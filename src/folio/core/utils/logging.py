"""Logging setup for folio processes (``folio serve`` and ``folio check``).

Everything in the package logs through loguru. The file sink is optional;
``folio serve --log-file`` with no value writes to :data:`DEFAULT_LOG_FILE`.
"""

import logging
import sys
from pathlib import Path

from loguru import logger

DEFAULT_LOG_FILE = "~/.folio/logs/folio.log"

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> <level>{level: <7}</level> <cyan>folio</cyan> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {name}:{function}:{line} | {message}"

# stdlib loggers of libraries folio drives; their INFO/DEBUG chatter is not ours
QUIET_LOGGERS = ("watchdog", "MARKDOWN", "httpx", "multipart")


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    rotation: str = "5 MB",
    retention: int = 3,
) -> Path | None:
    """Route folio logs to stderr and, if *log_file* is set, a rotating file.

    Args:
        level: Minimum level, case-insensitive.
        log_file: File sink path; ``~`` is expanded and missing parent
            directories are created.
        rotation: Size at which the file sink rolls over.
        retention: Number of rolled files to keep.

    Returns:
        Resolved path of the file sink, or None when logging to stderr only.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if not log_file:
        return None

    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(path),
        level=level,
        format=FILE_FORMAT,
        rotation=rotation,
        retention=retention,
        encoding="utf-8",
    )
    return path
