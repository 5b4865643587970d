# === FILE: page_signals/logger.py ===
"""Logging for **PageSignals**.

All modules share one logger::

    from page_signals.logger import logger
    logger.debug("Found %d JSON-LD blocks", count)

Records go to stderr, so a JSON report printed to stdout stays parseable.
The CLI calls :func:`init_logging` once options are known.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "PageSignals"


def init_logging(
    level: Union[int, str] = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Drop current handlers and attach stderr (plus *log_file*, rotated at 5 MiB)."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for handler in lg.handlers[:]:
        lg.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging", "DEFAULT_FORMAT", "LOGGER_NAME"]
