import os
from unittest import mock

import pytest

from smon import widgets


def test_format_percent_two_decimals():
    assert widgets.format_percent(5) == "5.00%"


def test_format_percent_rounds():
    assert widgets.format_percent(33.333) == "33.33%"


def test_title_line_joins_with_space():
    assert widgets.title_line("System Metrics Monitor: Overview", "") == "System Metrics Monitor: Overview "
    assert widgets.title_line("a", "b") == "a b"


def test_usage_bar_narrow_collapses():
    line = widgets.usage_bar("CPU Usage:", 42.0, 35, 30, 35)
    assert line == "CPU Usage: [|] " + widgets.format_percent(42.0)


@pytest.mark.parametrize("usage", [0.0, 10.0, 50.0, 99.9, 100.0])
def test_usage_bar_width_is_constant(usage):
    width, reserved = 80, 30
    line = widgets.usage_bar("T", usage, width, reserved, 35)
    inner = line[line.index("[") + 1 : line.index("]")]
    assert len(inner) == width - reserved
    assert line.endswith(widgets.format_percent(usage))


def test_usage_bar_full_and_empty():
    width, reserved = 70, 30
    full = widgets.usage_bar("T", 100.0, width, reserved, 35)
    empty = widgets.usage_bar("T", 0.0, width, reserved, 35)
    assert full.count("|") == width - reserved
    assert empty.count("|") == 0


def test_usage_bar_half():
    width, reserved = 70, 30
    line = widgets.usage_bar("T", 50.0, width, reserved, 35)
    assert line.count("|") == (width - reserved) // 2


def test_usage_bar_monotonic():
    counts = [widgets.usage_bar("T", u, 100, 30, 35).count("|") for u in range(0, 101, 5)]
    assert counts == sorted(counts)


def test_usage_bar_clamps_overflow():
    line = widgets.usage_bar("T", 250.0, 60, 30, 35)
    inner = line[line.index("[") + 1 : line.index("]")]
    assert inner == "|" * (60 - 30)


def test_terminal_size():
    with mock.patch("shutil.get_terminal_size", return_value=os.terminal_size((120, 40))):
        assert widgets.terminal_size() == (120, 40)