"""Parsing of timestamps stored by SQLite and formatting with Go-style layouts."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_TIME_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})"
    r"(?:[ T](\d{2}):(\d{2})(?::(\d{2})(?:\.(\d+))?([+-]\d{2}:\d{2})?)?)?"
)


def parse_sqlite_time(s: str) -> datetime:
    """Parse a timestamp in one of the formats SQLite stores."""
    m = _TIME_RE.fullmatch(s)
    if not m:
        raise ValueError("could not parse time")
    year, month, day, hour, minute, second, frac, tz = m.groups()
    tzinfo = timezone.utc
    if tz:
        sign = -1 if tz[0] == "-" else 1
        offset = timedelta(hours=int(tz[1:3]), minutes=int(tz[4:6]))
        tzinfo = timezone(sign * offset)
    micro = int((frac or "0")[:6].ljust(6, "0"))
    try:
        return datetime(
            int(year), int(month), int(day),
            int(hour or 0), int(minute or 0), int(second or 0), micro, tzinfo,
        )
    except ValueError:
        raise ValueError("could not parse time") from None


_TOKEN_RE = re.compile(
    r"January|Monday|2006|Z07:00|Z0700|-07:00|-0700|-07|Jan|Mon|MST|"
    r"[.,]0+(?!\d)|[.,]9+(?!\d)|01|02|_2|03|04|05|06|15|PM|pm|1|2|3|4|5"
)


def _offset(dt: datetime, colon: bool, z: bool, short: bool = False) -> str:
    off = dt.utcoffset() or timedelta(0)
    if z and off == timedelta(0):
        return "Z"
    total = int(off.total_seconds()) // 60
    sign = "-" if total < 0 else "+"
    h, m = divmod(abs(total), 60)
    if short:
        return f"{sign}{h:02d}"
    return f"{sign}{h:02d}{':' if colon else ''}{m:02d}"


def _token(dt: datetime, tok: str) -> str:
    if tok[0] in ".," and len(tok) > 1:
        digits = f"{dt.microsecond:06d}000"[: len(tok) - 1]
        if tok[1] == "9":
            digits = digits.rstrip("0")
            return tok[0] + digits if digits else ""
        return tok[0] + digits
    hour12 = dt.hour % 12 or 12
    table = {
        "January": dt.strftime("%B"),
        "Monday": dt.strftime("%A"),
        "2006": f"{dt.year:04d}",
        "Jan": dt.strftime("%b"),
        "Mon": dt.strftime("%a"),
        "01": f"{dt.month:02d}",
        "02": f"{dt.day:02d}",
        "_2": f"{dt.day:>2d}",
        "03": f"{hour12:02d}",
        "04": f"{dt.minute:02d}",
        "05": f"{dt.second:02d}",
        "06": f"{dt.year % 100:02d}",
        "15": f"{dt.hour:02d}",
        "PM": "PM" if dt.hour >= 12 else "AM",
        "pm": "pm" if dt.hour >= 12 else "am",
        "1": str(dt.month),
        "2": str(dt.day),
        "3": str(hour12),
        "4": str(dt.minute),
        "5": str(dt.second),
    }
    if tok in table:
        return table[tok]
    if tok == "MST":
        off = dt.utcoffset() or timedelta(0)
        return "UTC" if off == timedelta(0) else _offset(dt, False, False)
    return _offset(dt, ":" in tok, tok.startswith("Z"), tok == "-07")


def format_go_time(dt: datetime, layout: str) -> str:
    """Format ``dt`` using a Go reference-time layout."""
    return _TOKEN_RE.sub(lambda m: _token(dt, m.group(0)), layout)


def convert_bytes(buf: bytes, tfmt: str) -> str:
    """Return ``buf`` as text, reformatted with ``tfmt`` if it is a timestamp."""
    s = buf.decode("utf-8", errors="replace")
    if s.strip():
        try:
            return format_go_time(parse_sqlite_time(s), tfmt)
        except ValueError:
            pass
    return s