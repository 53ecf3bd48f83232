from datetime import timedelta

import pytest

from sqlrepl.sqlitetime import convert_bytes, format_go_time, parse_sqlite_time

RFC3339 = "2006-01-02T15:04:05Z07:00"


def test_parse_date_only():
    t = parse_sqlite_time("2021-03-04")
    assert (t.year, t.month, t.day, t.hour) == (2021, 3, 4, 0)


def test_parse_with_offset():
    t = parse_sqlite_time("2021-03-04 05:06:07.5-07:00")
    assert t.utcoffset() == timedelta(hours=-7)
    assert t.microsecond == 500000


def test_parse_invalid():
    with pytest.raises(ValueError):
        parse_sqlite_time("not a time")


def test_parse_minutes_with_offset_rejected():
    with pytest.raises(ValueError):
        parse_sqlite_time("2021-03-04 05:06-07:00")


def test_convert_time_round_trip():
    out = convert_bytes(b"2021-01-02 03:04:05", RFC3339)
    assert out == "2021-01-02T03:04:05Z"
    assert parse_sqlite_time(out.replace("T", " ").rstrip("Z")).second == 5


def test_convert_non_time_unchanged():
    assert convert_bytes(b"hello", RFC3339) == "hello"
    assert convert_bytes(b"   ", RFC3339) == "   "


def test_format_kitchen():
    t = parse_sqlite_time("2021-01-02 15:04:05")
    assert format_go_time(t, "3:04PM") == "3:04PM"