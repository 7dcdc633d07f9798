import re

import pytest
from loguru import logger

from converters.dispatcher import RowDispatcher, RunCounters, is_header_line
from converters.errors import ConfigurationError
from converters.progress import ProgressReporter


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(messages.append, format="{message}")
    yield messages
    logger.remove(handler_id)


def make_dispatcher(interval=10):
    headers, rows = [], []
    dispatcher = RowDispatcher(
        header_hook=headers.append,
        row_hook=rows.append,
        reporter=ProgressReporter(interval),
    )
    return dispatcher, headers, rows


@pytest.mark.parametrize(
    "line, expected",
    [
        ("#gene\tdisease", True),
        ("#!/usr/bin/env converter", True),
        ("# comment", True),
        ("#", True),
        ("gene\t#disease", False),
        (" #indented", False),
        ("HTT\tHuntington disease", False),
        ("", False),
    ],
)
def test_is_header_line(line, expected):
    assert is_header_line(line) == expected, f"Failed for line: {line!r}"


def test_lines_routed_in_order():
    dispatcher, headers, rows = make_dispatcher()
    lines = ["#a\tb\n", "1\t2\n", "3\t4  \n", "#late header\n", "5\t6"]

    counters = dispatcher.dispatch(lines)

    assert headers == ["#a\tb", "#late header"]
    assert rows == ["1\t2", "3\t4", "5\t6"]
    assert counters == RunCounters(line_number=5, row_index=3)


def test_blank_lines_are_counted_but_not_dispatched():
    dispatcher, headers, rows = make_dispatcher()

    counters = dispatcher.dispatch(["#h\n", "\n", "   \n", "row\n"])

    assert rows == ["row"]
    assert counters.line_number == 4
    assert counters.row_index == 1


def test_leading_whitespace_is_kept():
    dispatcher, _, rows = make_dispatcher()
    dispatcher.dispatch(["  indented row\t\n"])
    assert rows == ["  indented row"]


def test_header_lines_never_reach_data_hook():
    dispatcher, headers, rows = make_dispatcher()
    dispatcher.dispatch(["#1\n", "#2\n", "#!3\n"])
    assert rows == []
    assert len(headers) == 3
    assert dispatcher.counters.row_index == 0


def test_empty_stream():
    dispatcher, headers, rows = make_dispatcher()
    counters = dispatcher.dispatch([])
    assert counters == RunCounters(0, 0)
    assert headers == [] and rows == []


def test_hook_failure_aborts_dispatch():
    seen = []

    def failing_row_hook(row):
        seen.append(row)
        if row == "bad":
            raise ValueError("cannot convert")

    dispatcher = RowDispatcher(header_hook=lambda row: None, row_hook=failing_row_hook)

    with pytest.raises(ValueError, match="cannot convert"):
        dispatcher.dispatch(["ok\n", "bad\n", "never\n"])

    assert seen == ["ok", "bad"]
    assert dispatcher.counters.line_number == 2


def test_progress_logged_every_interval(log_messages):
    dispatcher, _, _ = make_dispatcher(interval=2)

    dispatcher.dispatch(["#h\n"] + [f"row {i}\n" for i in range(5)])

    periodic = [m for m in log_messages if "running time:" in m]
    total = [m for m in log_messages if "running time total" in m]
    assert len(periodic) == 2  # after rows 2 and 4
    assert len(total) == 1


def test_progress_disabled_still_logs_total(log_messages):
    dispatcher, _, _ = make_dispatcher(interval=0)
    dispatcher.dispatch([f"row {i}\n" for i in range(20)])
    assert not any("running time:" in m for m in log_messages)
    assert sum("running time total" in m for m in log_messages) == 1


def test_negative_progress_interval_rejected():
    with pytest.raises(ConfigurationError):
        ProgressReporter(-1)


def test_progress_line_format(log_messages):
    dispatcher, _, _ = make_dispatcher(interval=1)
    dispatcher.dispatch(["row\n"])

    messages = [m.strip() for m in log_messages if "running time" in m]
    assert re.fullmatch(
        r"============ running time: \d+\.\d{3}s \(1 rows\) ============", messages[0]
    )
    assert re.fullmatch(
        r"============ running time total: \d+\.\d{3}s ============", messages[1]
    )
