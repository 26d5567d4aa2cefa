"""Tests for dbusgen.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dbusgen.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_dbusgen_logger():
    yield
    logger = logging.getLogger("dbusgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_get_logger_nests_under_package() -> None:
    assert get_logger().name == "dbusgen"
    assert get_logger("merge").name == "dbusgen.merge"


@pytest.mark.parametrize(
    "verbose, quiet, level",
    [
        (False, False, logging.INFO),
        (True, False, logging.DEBUG),
        (False, True, logging.WARNING),
        (True, True, logging.DEBUG),
    ],
)
def test_console_level_follows_flags(verbose: bool, quiet: bool, level: int) -> None:
    logger = configure_logging(verbose=verbose, quiet=quiet)
    (console,) = logger.handlers
    assert console.level == level
    assert logger.level == level


def test_diagnostics_never_reach_stdout(capsys) -> None:
    configure_logging()
    get_logger("orchestrator").info("Generating package %s", "demo")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "[dbusgen] INFO Generating package demo" in captured.err


def test_log_file_records_debug_even_when_quiet(tmp_path: Path, capsys) -> None:
    log_file = tmp_path / "dbusgen.log"

    configure_logging(quiet=True, log_file=log_file)
    logger = configure_logging(quiet=True, log_file=log_file)
    get_logger("merge").debug("Skipping duplicate interface %s", "a.B")
    for handler in logger.handlers:
        handler.flush()

    assert len(logger.handlers) == 2
    assert "DEBUG dbusgen.merge: Skipping duplicate interface a.B" in log_file.read_text(encoding="utf-8")
    assert "Skipping duplicate" not in capsys.readouterr().err
