"""Logging configuration for taskboard.

The TUI owns the terminal while it runs, so console output there goes
through Textual's handler (visible with ``textual console``) rather than
straight to stderr. The one-shot ``--list`` mode logs to stderr as usual.
"""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOGGER_NAME = "taskboard"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_level(verbose: int) -> int:
    """INFO for -v and for file-only logging, DEBUG for -vv and above."""
    return logging.DEBUG if verbose >= 2 else logging.INFO


def build_handlers(
    verbose: int,
    log_file: Path | None,
    interactive: bool,
) -> list[logging.Handler]:
    """Create the handlers for the requested outputs."""
    handlers: list[logging.Handler] = []
    if verbose > 0:
        if interactive:
            from textual.logging import TextualHandler

            handlers.append(TextualHandler())
        else:
            handlers.append(logging.StreamHandler(sys.stderr))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    return handlers


def setup_logging(
    verbose: int = 0,
    log_file: Path | None = None,
    interactive: bool = False,
) -> logging.Logger:
    """Configure the ``taskboard`` logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2+=DEBUG)
        log_file: Optional path to write logs to file
        interactive: True when the Textual UI will own the terminal

    Returns:
        The configured logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = build_handlers(verbose, log_file, interactive)
    if not handlers:
        return logger

    level = log_level(verbose)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    mode = "tui" if interactive else "list"
    logger.info("=" * 60)
    logger.info(
        "taskboard starting | %s | mode=%s | level=%s",
        timestamp,
        mode,
        logging.getLevelName(level),
    )
    logger.info("=" * 60)
    return logger
