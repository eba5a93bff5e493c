"""Console and file logging for the trip_planner package.

Status messages go to stderr through Rich so stdout stays clean for grocery
lists and JSON output that may be piped elsewhere.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console

LOGGER_NAME = "trip_planner"
FILE_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
LEVELS = ("debug", "info", "warning", "error")

stderr_console = Console(stderr=True)


def parse_level(name: str) -> int:
    """Map a level name from the command line to a logging constant."""
    if name.lower() not in LEVELS:
        raise ValueError(f"Unknown log level '{name}' (valid: {', '.join(LEVELS)})")
    return getattr(logging, name.upper())


def setup_logging(level: str = "info", log_file: Path | None = None) -> logging.Logger:
    """Attach a stderr RichHandler at level and, optionally, a debug-level log file.

    Calling it again replaces the handlers from the previous call. The file
    receives everything down to DEBUG regardless of the console level, so a
    run with --log-file keeps the skipped-recipe and unit-mismatch details.
    """
    from rich.logging import RichHandler

    console_level = parse_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if log_file else console_level)

    rich_handler = RichHandler(
        console=stderr_console,
        show_path=False,
        show_time=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(console_level)
    logger.addHandler(rich_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
