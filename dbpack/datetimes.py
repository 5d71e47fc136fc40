"""Conversion between MySQL date/time values and Python datetimes.

Text values look like ``YYYY-MM-DD[ HH:MM:SS[.ffffff]]``.  Binary values
use the layout of the binary result-set protocol: a little-endian year,
then one byte per field, then optional little-endian microseconds.

The all-zero MySQL date has no Python counterpart and is returned as
``None``.  Out-of-range fields roll over into the next larger field, so
month 13 is January of the next year and day 0 is the last day of the
previous month.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo

__all__ = [
    "parse_date_time",
    "parse_binary_date_time",
    "format_date_time",
    "format_binary_date_time",
    "format_binary_time",
]

_ZERO_DATE_TIME = "0000-00-00 00:00:00.000000"
_TEXT_LENGTHS = frozenset({10, 19, 21, 22, 23, 24, 25, 26})
_TIME_LENGTHS = frozenset({8, 10, 11, 12, 13, 14, 15})


def _as_bytes(value: str | bytes | bytearray) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _make(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    microsecond: int = 0,
    tz: tzinfo | None = None,
) -> datetime:
    """Build a datetime, rolling out-of-range fields over as a calendar would."""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    try:
        start = datetime(year, month, 1, tzinfo=tz)
        return start + timedelta(
            days=day - 1,
            hours=hour,
            minutes=minute,
            seconds=second,
            microseconds=microsecond,
        )
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"date out of range: {exc}") from exc


def _digit(b: int) -> int:
    if not 0x30 <= b <= 0x39:
        raise ValueError("not [0-9]")
    return b - 0x30


def _number(raw: bytes) -> int:
    value = 0
    for b in raw:
        value = value * 10 + _digit(b)
    return value


def _expect(raw: bytes, index: int, char: str) -> None:
    if raw[index] != ord(char):
        raise ValueError(f"bad value for field: `{chr(raw[index])}`")


def parse_date_time(value: str | bytes, tz: tzinfo | None = None) -> datetime | None:
    """Parse a MySQL text date or datetime.

    Returns ``None`` for the all-zero value and raises :class:`ValueError`
    for malformed input.
    """
    raw = _as_bytes(value)
    if len(raw) not in _TEXT_LENGTHS:
        raise ValueError(f"invalid time bytes: {raw.decode('utf-8', errors='replace')}")
    if raw.decode("latin-1") == _ZERO_DATE_TIME[: len(raw)]:
        return None

    year = max(_number(raw[0:4]), 1)
    _expect(raw, 4, "-")
    month = max(_number(raw[5:7]), 1)
    _expect(raw, 7, "-")
    day = max(_number(raw[8:10]), 1)
    if len(raw) == 10:
        return _make(year, month, day, tz=tz)

    _expect(raw, 10, " ")
    hour = _number(raw[11:13])
    _expect(raw, 13, ":")
    minute = _number(raw[14:16])
    _expect(raw, 16, ":")
    second = _number(raw[17:19])
    if len(raw) == 19:
        return _make(year, month, day, hour, minute, second, tz=tz)

    _expect(raw, 19, ".")
    fraction = raw[20:]
    microsecond = _number(fraction) * 10 ** (6 - len(fraction))
    return _make(year, month, day, hour, minute, second, microsecond, tz)


def parse_binary_date_time(num: int, data: bytes, tz: tzinfo | None = None) -> datetime | None:
    """Decode a binary DATE/DATETIME whose payload is ``num`` bytes long.

    Returns ``None`` when ``num`` is zero.
    """
    if num == 0:
        return None
    if num not in (4, 7, 11):
        raise ValueError(f"invalid DATETIME packet length {num}")
    data = bytes(data)
    if len(data) < num:
        raise ValueError(f"DATETIME packet holds {len(data)} bytes, expected {num}")
    year = int.from_bytes(data[0:2], "little")
    month, day = data[2], data[3]
    if num == 4:
        return _make(year, month, day, tz=tz)
    hour, minute, second = data[4], data[5], data[6]
    if num == 7:
        return _make(year, month, day, hour, minute, second, tz=tz)
    microsecond = int.from_bytes(data[7:11], "little")
    return _make(year, month, day, hour, minute, second, microsecond, tz)


def format_date_time(value: datetime | date) -> str:
    """Format a datetime as MySQL text, dropping a zero time and trailing zeros."""
    if not 1 <= value.year <= 9999:
        raise ValueError(f"year is not in the range [1, 9999]: {value.year}")
    text = f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
    if not isinstance(value, datetime):
        return text
    if (value.hour, value.minute, value.second, value.microsecond) == (0, 0, 0, 0):
        return text
    text += f" {value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    if value.microsecond == 0:
        return text
    return f"{text}.{value.microsecond * 1000:09d}".rstrip("0")


def _two(value: int) -> str:
    if not 0 <= value < 100:
        raise ValueError(f"value {value} does not fit in two digits")
    return f"{value:02d}"


def _microseconds(src: bytes, decimals: int) -> str:
    if decimals <= 0:
        return ""
    if not src:
        return ".000000"[: decimals + 1]
    if len(src) < 4:
        raise ValueError("truncated microseconds field")
    micro = int.from_bytes(src[:4], "little")
    p1, rest = divmod(micro, 10000)
    p2, p3 = divmod(rest, 100)
    digits = _two(p1) + _two(p2) + _two(p3)
    return "." + digits[: min(decimals, 6)]


def _date_kind(length: int) -> str:
    return "DATETIME" if length > 10 else "DATE"


def format_binary_date_time(src: bytes, length: int) -> str:
    """Render a binary DATE/DATETIME payload as text of the given column length."""
    src = bytes(src)
    if not src:
        return _ZERO_DATE_TIME[:length]
    if length not in _TEXT_LENGTHS:
        raise ValueError(f"illegal {_date_kind(length)} length {length}")
    if len(src) not in (4, 7, 11):
        raise ValueError(f"illegal {_date_kind(length)} packet length {len(src)}")

    century, year = divmod(int.from_bytes(src[0:2], "little"), 100)
    text = f"{_two(century)}{_two(year)}-{_two(src[2])}-{_two(src[3])}"
    if length == 10:
        return text
    if len(src) == 4:
        return text + _ZERO_DATE_TIME[10:length]
    text += f" {_two(src[4])}:{_two(src[5])}:{_two(src[6])}"
    return text + _microseconds(src[7:], length - 20)


def format_binary_time(src: bytes, length: int) -> str:
    """Render a binary TIME payload as ``[-]HH:MM:SS[.ffffff]`` text."""
    src = bytes(src)
    if not src:
        return _ZERO_DATE_TIME[11 : 11 + length]
    if length not in _TIME_LENGTHS:
        raise ValueError(f"illegal TIME length {length}")
    if len(src) not in (8, 12):
        raise ValueError(f"invalid TIME packet length {len(src)}")

    sign = "-" if src[0] == 1 else ""
    days = int.from_bytes(src[1:5], "little")
    hours = days * 24 + src[5]
    hour_text = str(hours) if hours >= 100 else _two(hours)
    text = f"{sign}{hour_text}:{_two(src[6])}:{_two(src[7])}"
    return text + _microseconds(src[8:], length - 9)