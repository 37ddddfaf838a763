import logging

import pytest

from zbplugins.logformat import (
    COLOR_INFO,
    COLOR_RESET,
    TRACE,
    LogFormatter,
    level_color,
)


def _record(levelno, msg, args=()):
    return logging.makeLogRecord(
        {
            "levelno": levelno,
            "levelname": logging.getLevelName(levelno),
            "msg": msg,
            "args": args,
        }
    )


def test_warning_format_exact():
    out = LogFormatter().format(_record(logging.WARNING, "hi"))
    assert out == "\x1b[33m[WARNING] hi \n\x1b[0m"


@pytest.mark.parametrize(
    "levelno, code",
    [
        (logging.CRITICAL, "\x1b[1;31m"),
        (logging.ERROR, "\x1b[31m"),
        (logging.WARNING, "\x1b[33m"),
        (logging.INFO, "\x1b[37m"),
        (logging.DEBUG, "\x1b[32m"),
        (TRACE, "\x1b[36m"),
    ],
)
def test_level_colors(levelno, code):
    assert level_color(levelno) == code


def test_unknown_level_defaults_to_info():
    assert level_color(42) == COLOR_INFO


def test_args_are_merged_and_reset_appended():
    out = LogFormatter().format(_record(logging.ERROR, "value %d", (7,)))
    assert out.startswith(level_color(logging.ERROR) + "[ERROR] value 7")
    assert out.endswith(" \n" + COLOR_RESET)


def test_trace_level_name():
    out = LogFormatter().format(_record(TRACE, "deep"))
    assert "[TRACE] deep" in out