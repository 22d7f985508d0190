import logging
import re

import pytest

from rhineutils import log_util
from rhineutils.log_util import (
    DEFAULT_DEBUG_LEVEL,
    ENTRY_TAG,
    SEVERITY_DEBUG,
    SEVERITY_ERROR,
    SEVERITY_INFO,
    SEVERITY_VERBOSE,
    SEVERITY_WARNING,
    VERBOSE,
    LocLogger,
    get_timestamp,
    logger_init,
)

NAME = "rhineutils.testlog"


@pytest.fixture
def logger():
    return LocLogger(name=NAME)


def _check_clock(text, fraction_digits):
    clock, fraction = text.split(".")
    hours, minutes, seconds = (int(part) for part in clock.split(":"))
    assert len(clock) == 8
    assert len(fraction) == fraction_digits
    assert fraction.isdigit()
    assert 0 <= hours < 24
    assert 0 <= minutes < 60
    assert 0 <= seconds < 60


def test_default_level_uses_natural_levels(logger):
    assert logger.emit_level(SEVERITY_ERROR) == logging.ERROR
    assert logger.emit_level(SEVERITY_WARNING) == logging.WARNING
    assert logger.emit_level(SEVERITY_INFO) == logging.INFO
    assert logger.emit_level(SEVERITY_DEBUG) == logging.DEBUG
    assert logger.emit_level(SEVERITY_VERBOSE) == VERBOSE


def test_numeric_level_promotes_to_error_and_filters(logger):
    logger.configure(3, 0)
    assert logger.emit_level(SEVERITY_ERROR) == logging.ERROR
    assert logger.emit_level(SEVERITY_INFO) == logging.ERROR
    assert logger.emit_level(SEVERITY_DEBUG) is None
    assert logger.emit_level(SEVERITY_VERBOSE) is None


@pytest.mark.parametrize("level", [0, 6, 0x10])
def test_out_of_range_level_silences_everything(logger, level):
    logger.configure(level, 0)
    assert all(
        logger.emit_level(sev) is None
        for sev in (SEVERITY_ERROR, SEVERITY_WARNING, SEVERITY_INFO, SEVERITY_DEBUG, SEVERITY_VERBOSE)
    )


def test_unknown_severity_rejected(logger):
    with pytest.raises(ValueError):
        logger.emit_level(9)


def test_error_message_has_prefix(logger, caplog):
    caplog.set_level(VERBOSE, logger=NAME)
    assert logger.error("value %d", 5) is True
    records = [r for r in caplog.records if r.name == NAME]
    assert [r.getMessage() for r in records] == ["W/value 5"]
    assert records[0].levelno == logging.ERROR


def test_filtered_message_not_emitted(logger, caplog):
    caplog.set_level(VERBOSE, logger=NAME)
    logger.configure(2, 0)
    assert logger.debug("hidden") is False
    assert logger.warning("shown") is True
    messages = [r.getMessage() for r in caplog.records if r.name == NAME]
    assert messages == ["W/shown"]
    assert caplog.records[-1].levelno == logging.ERROR


def test_verbose_and_info_prefixes(logger, caplog):
    caplog.set_level(VERBOSE, logger=NAME)
    logger.verbose("a")
    logger.info("b")
    messages = [r.getMessage() for r in caplog.records if r.name == NAME]
    assert messages == ["V/a", "I/b"]


def test_trace_without_timestamp(logger):
    assert logger.trace(ENTRY_TAG, "work", "x") == "Entering work x"


def test_trace_with_timestamp(logger):
    logger.configure(DEFAULT_DEBUG_LEVEL, 1)
    msg = logger.trace(ENTRY_TAG, "work", "x")
    assert msg[0] == "["
    stamp, rest = msg[1:].split("] ", 1)
    assert rest == "Entering work x"
    assert len(stamp) == 15
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}\.\d{6}", stamp) is not None


def test_get_timestamp_fixed_values():
    assert get_timestamp(0) == "00:00:00.000000"
    assert get_timestamp(3661.5) == "01:01:01.500000"


def test_get_timestamp_wraps_days():
    assert get_timestamp(86400 + 3661.5) == get_timestamp(3661.5)


def test_get_timestamp_current_format():
    text = get_timestamp()
    assert len(text) == 15
    _check_clock(text, 6)


def test_logger_init_configures_shared_logger():
    shared = log_util.loc_logger
    saved = (shared.debug_level, shared.timestamp)
    try:
        result = logger_init(4, 1)
        assert result is shared
        assert (shared.debug_level, shared.timestamp) == (4, 1)
        assert shared.emit_level(SEVERITY_VERBOSE) is None
    finally:
        shared.configure(*saved)