"""Unit tests for logging configuration."""

import logging

import pytest

from docrepo.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_level():
    setup_logging(level="DEBUG")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert logging.getLogger("pymongo").level == logging.WARNING


def test_setup_logging_to_file(tmp_path):
    log_file = tmp_path / "logs" / "docrepo.log"
    setup_logging(level=logging.INFO, log_file=log_file)
    get_logger("test").info("written to file")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "docrepo.test - INFO - written to file" in log_file.read_text()


def test_get_logger_namespaces_under_docrepo():
    assert get_logger("users").name == "docrepo.users"
