"""Logging set-up shared by the CLI, the batch driver and the service."""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT = "docpress"
_HANDLER_TAG = "_docpress_handler"

CONSOLE_FORMAT = "[docpress] %(levelname)s %(message)s"
VERBOSE_CONSOLE_FORMAT = "[docpress] %(levelname)s %(name)s (%(threadName)s): %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``docpress.<name>``, or the package logger when no name is given."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console and optional file handlers on the ``docpress`` logger.

    Verbose mode lowers the level to DEBUG (generator gaps, per-symbol
    dispatch) and tags console lines with the logger and worker thread so
    interleaved batch output stays readable. The file sink records DEBUG
    and thread names whatever the console verbosity, because batch workers
    log concurrently.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    # Handlers gate their own levels; the logger passes everything a sink wants.
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    # Only handlers installed here are replaced; embedding hosts keep theirs.
    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(VERBOSE_CONSOLE_FORMAT if verbose else CONSOLE_FORMAT))
    _install(logger, console, level)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setFormatter(logging.Formatter(FILE_FORMAT))
        _install(logger, sink, logging.DEBUG)

    return logger


def _install(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    setattr(handler, _HANDLER_TAG, True)
    logger.addHandler(handler)


__all__ = ["configure_logging", "get_logger"]
