import logging

import pytest

from a11ycore.logging import LOGGER_NAME, configure_logging, logger


@pytest.fixture(autouse=True)
def _reset(monkeypatch):
    monkeypatch.delenv("A11YCORE_LOG_LEVEL", raising=False)
    yield
    configure_logging("")


def test_package_logger_is_silent_by_default(capsys):
    configure_logging()
    logger.warning("should not appear")
    assert capsys.readouterr().err == ""


def test_explicit_level_installs_stream_handler(capsys):
    configure_logging("debug")
    pkg_logger = logging.getLogger(LOGGER_NAME)
    assert pkg_logger.level == logging.DEBUG
    logger.debug("rule trace")
    err = capsys.readouterr().err
    assert "| DEBUG | a11ycore | rule trace" in err


def test_env_level_is_read_when_no_level_given(monkeypatch):
    monkeypatch.setenv("A11YCORE_LOG_LEVEL", "WARNING")
    configure_logging()
    assert logging.getLogger(LOGGER_NAME).level == logging.WARNING


def test_repeated_configuration_keeps_single_handler():
    configure_logging("INFO")
    configure_logging("INFO")
    handlers = logging.getLogger(LOGGER_NAME).handlers
    assert len(handlers) == 1


def test_empty_level_resets_to_null_handler():
    configure_logging("INFO")
    configure_logging("")
    handlers = logging.getLogger(LOGGER_NAME).handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.NullHandler)
