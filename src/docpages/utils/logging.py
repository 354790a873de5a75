"""Logging configuration for docpages.

Everything logs below the "docpages" logger. The console shows Rich
formatted records; a log file, when configured, receives every record.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "docpages"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers that emit a debug record per page or per source block. They stay
# at INFO below verbosity 3 so -vv output remains readable on large builds.
PER_PAGE_LOGGERS = (
    "docpages.orchestration.cache",
    "docpages.conversion.highlight",
    "docpages.context.version_context",
)

LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
    3: logging.DEBUG,
}


def setup_logging(
    verbosity: int = 1,
    log_file: Optional[Path] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Configure the docpages logger.

    Args:
        verbosity: 0 warnings only, 1 progress, 2 debug, 3 debug including
            per-page records and tracebacks with locals.
        log_file: Also write every record to this file.
        console: Console to log to (stderr if omitted).

    Returns:
        The configured "docpages" logger.
    """
    level = LEVELS.get(verbosity, logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if log_file else level)
    logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbosity >= 2,
        show_path=verbosity >= 2,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbosity >= 3,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    per_page_level = logging.NOTSET if verbosity >= 3 or log_file else logging.INFO
    for name in PER_PAGE_LOGGERS:
        logging.getLogger(name).setLevel(per_page_level)

    return logger
