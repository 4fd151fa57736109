import logging
import tempfile
from logging.handlers import RotatingFileHandler

import pytest

from courtpairing.constants import ENV_LOG_FILE
from courtpairing.utils.logging import PACKAGE_LOGGER, set_log_level, setup_logger


def _file_handlers(lgr):
    return [h for h in lgr.handlers if isinstance(h, RotatingFileHandler)]


@pytest.fixture
def package_logger():
    lgr = logging.getLogger(PACKAGE_LOGGER)
    yield lgr
    for handler in _file_handlers(lgr):
        lgr.removeHandler(handler)
        handler.close()


def test_file_logging_is_off_by_default(monkeypatch, package_logger):
    monkeypatch.delenv(ENV_LOG_FILE, raising=False)
    lgr = setup_logger("courtpairing.sample_quiet")

    assert _file_handlers(lgr) == []
    assert _file_handlers(package_logger) == []


def test_module_loggers_share_one_file_handler(monkeypatch, tmp_path, package_logger):
    monkeypatch.setenv(ENV_LOG_FILE, "1")
    monkeypatch.setattr(tempfile, "gettempdir", lambda: str(tmp_path))

    first = setup_logger("courtpairing.sample_first")
    second = setup_logger("courtpairing.sample_second")
    first.warning("first module message")
    second.warning("second module message")

    assert _file_handlers(first) == []
    assert _file_handlers(second) == []
    handlers = _file_handlers(package_logger)
    assert len(handlers) == 1
    handlers[0].flush()

    log_file = tmp_path / "court-pairing" / "logs" / "court-pairing.log"
    text = log_file.read_text(encoding="utf-8")
    assert "first module message" in text
    assert "second module message" in text


def test_set_log_level_reaches_package_loggers(monkeypatch):
    monkeypatch.delenv(ENV_LOG_FILE, raising=False)
    lgr = setup_logger("courtpairing.sample_level")
    try:
        set_log_level(logging.DEBUG)
        assert lgr.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in lgr.handlers)
    finally:
        set_log_level(logging.INFO)
