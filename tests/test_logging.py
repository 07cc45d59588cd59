"""Tests for docpress logging set-up."""

from __future__ import annotations

import logging
from pathlib import Path

from docpress.logging import configure_logging, get_logger


def test_get_logger_uses_package_hierarchy() -> None:
    assert get_logger().name == "docpress"
    assert get_logger("batch").name == "docpress.batch"


def test_configure_logging_replaces_only_its_own_handlers() -> None:
    logger = get_logger()
    foreign = logging.NullHandler()
    logger.addHandler(foreign)
    try:
        configure_logging()
        configure_logging(verbose=True)

        assert foreign in logger.handlers
        assert len(logger.handlers) == 2
        assert logger.level == logging.DEBUG
        assert "threadName" in logger.handlers[-1].formatter._fmt
    finally:
        logger.removeHandler(foreign)


def test_configure_logging_writes_file_sink(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "build.log"
    logger = configure_logging(log_file=log_file)

    get_logger("dispatcher").debug("gap for T:Contoso.Widget")
    for handler in logger.handlers:
        handler.flush()

    assert "DEBUG docpress.dispatcher" in log_file.read_text(encoding="utf-8")
    console = next(handler for handler in logger.handlers if not isinstance(handler, logging.FileHandler))
    assert console.level == logging.INFO
    configure_logging()
