# File: tests/test_logger.py
import logging

import pytest

from page_signals.logger import LOGGER_NAME, init_logging, logger


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    init_logging()


def test_shared_instance_is_project_logger():
    assert logger is logging.getLogger(LOGGER_NAME)
    assert logger.propagate is False


def test_reinit_replaces_handlers(tmp_path):
    log_file = tmp_path / "signals.log"
    lg = init_logging("DEBUG", log_file, "%(levelname)s:%(message)s")
    assert lg.level == logging.DEBUG
    assert len(lg.handlers) == 2

    lg.debug("parsed %s", "page")
    for handler in lg.handlers:
        handler.flush()
    assert log_file.read_text(encoding="utf-8") == "DEBUG:parsed page\n"

    lg = init_logging()
    assert len(lg.handlers) == 1
    assert lg.level == logging.WARNING


def test_console_output_goes_to_stderr(capsys):
    init_logging("INFO", log_format="%(message)s")
    logger.info("hello")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "hello\n"
