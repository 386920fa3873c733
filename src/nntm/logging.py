"""Logging configuration for nntm."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from . import __version__

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> None:
    """Configure the ``nntm`` logger from the CLI flags.

    The TUI owns the terminal, so nothing is set up unless asked for. A
    log file alone logs at INFO.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2+=DEBUG)
        log_file: Optional path to append logs to
    """
    if not verbose and log_file is None:
        return

    level = logging.DEBUG if verbose >= 2 else logging.INFO
    logger = logging.getLogger("nntm")
    logger.setLevel(level)

    if verbose:
        logger.addHandler(_handler(logging.StreamHandler(sys.stderr), level))

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), level))

    # Session separator, handy when the same file collects several runs
    started = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("-" * 60)
    logger.info("nntm %s | %s | level=%s", __version__, started, logging.getLevelName(level))
