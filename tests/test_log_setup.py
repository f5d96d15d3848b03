import logging

import orjson
import pytest
import structlog

from jiffy.core import log_setup


def _reset_logging():
    std_logger = logging.getLogger(log_setup.LOGGER_NAME)
    for handler in std_logger.handlers[:]:
        handler.close()
        std_logger.removeHandler(handler)
    structlog.reset_defaults()


@pytest.fixture
def configured(tmp_path):
    log_file = tmp_path / "state" / "jiffy.log"
    logger = log_setup.setup_logging(level=logging.DEBUG, log_file=str(log_file))
    yield logger, log_file
    _reset_logging()


@pytest.fixture
def state_home(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state-home"))
    yield tmp_path / "state-home"
    _reset_logging()


def test_file_handler_writes_json(configured):
    logger, log_file = configured

    structlog.get_logger("jiffy.menu.builder").info("Built application menu")

    records = [orjson.loads(line) for line in log_file.read_text().splitlines()]
    assert records[-1]["event"] == "Built application menu"
    assert records[-1]["level"] == "info"
    assert records[-1]["logger"] == "jiffy.menu.builder"


def test_handlers_are_not_duplicated(tmp_path, configured):
    log_setup.setup_logging(log_file=str(tmp_path / "again.log"))

    assert len(logging.getLogger(log_setup.LOGGER_NAME).handlers) == 2


def test_console_only(configured):
    log_setup.setup_logging(log_file=None)

    handlers = logging.getLogger(log_setup.LOGGER_NAME).handlers
    assert len(handlers) == 1


def test_repeat_filter_drops_consecutive_duplicates():
    repeat_filter = log_setup.RepeatFilter()

    def record(message, level=logging.WARNING):
        return logging.LogRecord("jiffy", level, __file__, 1, message, None, None)

    assert repeat_filter.filter(record("skip a"))
    assert not repeat_filter.filter(record("skip a"))
    assert repeat_filter.filter(record("skip b"))
    assert repeat_filter.filter(record("fatal", logging.ERROR))
    assert repeat_filter.filter(record("fatal", logging.ERROR))


def test_default_log_file_lives_in_xdg_state_home(state_home):
    log_setup.setup_logging()

    structlog.get_logger("jiffy.menu.cache").info("Wrote menu cache")

    log_file = state_home / "jiffy" / log_setup.LOG_FILE_NAME
    records = [orjson.loads(line) for line in log_file.read_text().splitlines()]
    assert records[-1]["event"] == "Wrote menu cache"
