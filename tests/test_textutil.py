import pytest

from sqlrepl.textutil import is_empty, last_color


@pytest.mark.parametrize("s", ["", "   ", "\t\n  \r", "\x00\x01"])
def test_is_empty_true(s):
    assert is_empty(s) is True


@pytest.mark.parametrize("s", ["a", "  x  ", "\n;\n", "é"])
def test_is_empty_false(s):
    assert is_empty(s) is False


def test_last_color_single():
    assert last_color("\x1b[31mhello") == "\x1b[31m"


def test_last_color_after_reset_is_empty():
    assert last_color("\x1b[31mfoo\x1b[0mbar") == ""


def test_last_color_collects_after_reset():
    s = "\x1b[31mfoo\x1b[0m\x1b[1mbar\x1b[32mbaz"
    assert last_color(s) == "\x1b[1m\x1b[32m"


def test_last_color_ignores_last_line():
    assert last_color("\x1b[31mfoo\nbar\x1b[32m") == "\x1b[31m"


def test_last_color_extended_sequence():
    seq = "\x1b[38;5;100m"
    assert last_color("x" + seq + "y") == seq


def test_last_color_plain_text():
    assert last_color("no colors here") == ""