from datetime import date, datetime, timedelta, timezone

import pytest

from dbpack.datetimes import (
    format_binary_date_time,
    format_binary_time,
    format_date_time,
    parse_binary_date_time,
    parse_date_time,
)


def _binary(dt: datetime, with_micro: bool = True) -> bytes:
    raw = dt.year.to_bytes(2, "little") + bytes(
        [dt.month, dt.day, dt.hour, dt.minute, dt.second]
    )
    if with_micro:
        raw += dt.microsecond.to_bytes(4, "little")
    return raw


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2022-01-02", datetime(2022, 1, 2)),
        ("2022-01-02 03:04:05", datetime(2022, 1, 2, 3, 4, 5)),
        ("2022-01-02 03:04:05.123456", datetime(2022, 1, 2, 3, 4, 5, 123456)),
        (b"2022-01-02 03:04:05.5", datetime(2022, 1, 2, 3, 4, 5, 500000)),
    ],
)
def test_parse_date_time(text, expected):
    assert parse_date_time(text) == expected


@pytest.mark.parametrize(
    "zero", ["0000-00-00", "0000-00-00 00:00:00", "0000-00-00 00:00:00.000000"]
)
def test_parse_zero_value_is_none(zero):
    assert parse_date_time(zero) is None


def test_parse_zero_month_and_day_become_one():
    assert parse_date_time("2022-00-00") == datetime(2022, 1, 1)


def test_parse_keeps_timezone():
    tz = timezone(timedelta(hours=8))
    result = parse_date_time("2022-05-06 07:08:09", tz)
    assert result.tzinfo is tz
    assert result.hour == 7


@pytest.mark.parametrize(
    "bad",
    ["2022-01", "2022/01/02", "2022-01-02T03:04:05", "20x2-01-02", "2022-01-02 03:04:05,1", ""],
)
def test_parse_rejects_malformed(bad):
    with pytest.raises(ValueError):
        parse_date_time(bad)


def test_parse_binary_variants():
    dt = datetime(2021, 12, 31, 23, 59, 58, 654321)
    raw = _binary(dt)
    assert parse_binary_date_time(11, raw) == dt
    assert parse_binary_date_time(7, raw[:7]) == dt.replace(microsecond=0)
    assert parse_binary_date_time(4, raw[:4]) == datetime(2021, 12, 31)
    assert parse_binary_date_time(0, b"") is None


def test_parse_binary_rejects_length():
    with pytest.raises(ValueError, match="invalid DATETIME packet length 5"):
        parse_binary_date_time(5, b"\x00" * 5)


def test_parse_binary_short_buffer():
    with pytest.raises(ValueError):
        parse_binary_date_time(11, b"\x00" * 4)


@pytest.mark.parametrize(
    "dt",
    [
        datetime(2022, 1, 2),
        datetime(2022, 1, 2, 3, 4, 5),
        datetime(2022, 1, 2, 3, 4, 5, 120000),
        datetime(1999, 12, 31, 23, 59, 59, 999999),
        datetime(1, 1, 1, 0, 0, 1),
    ],
)
def test_format_parse_round_trip(dt):
    assert parse_date_time(format_date_time(dt)) == dt


def test_format_date_time_shapes():
    assert format_date_time(datetime(2022, 1, 2)) == "2022-01-02"
    assert format_date_time(datetime(2022, 1, 2, 3, 4, 5)) == "2022-01-02 03:04:05"
    assert format_date_time(date(2022, 1, 2)) == "2022-01-02"
    text = format_date_time(datetime(2022, 1, 2, 3, 4, 5, 120000))
    assert text.startswith("2022-01-02 03:04:05.12")
    assert not text.endswith("0")


def test_format_binary_date_time_empty():
    assert format_binary_date_time(b"", 19) == "0000-00-00 00:00:00"
    assert format_binary_date_time(b"", 10) == "0000-00-00"


def test_format_binary_date_time_values():
    dt = datetime(2022, 1, 2, 3, 4, 5, 123456)
    raw = _binary(dt)
    assert format_binary_date_time(raw, 26) == "2022-01-02 03:04:05.123456"
    assert format_binary_date_time(raw, 19) == "2022-01-02 03:04:05"
    assert format_binary_date_time(raw, 10) == "2022-01-02"
    assert format_binary_date_time(raw[:4], 19) == "2022-01-02 00:00:00"
    assert format_binary_date_time(raw[:7], 23) == "2022-01-02 03:04:05.000"


@pytest.mark.parametrize("decimals", range(1, 7))
def test_format_binary_date_time_length_matches(decimals):
    raw = _binary(datetime(2022, 1, 2, 3, 4, 5, 123456))
    length = 19 + 1 + decimals
    text = format_binary_date_time(raw, length)
    assert len(text) == length
    assert "2022-01-02 03:04:05.123456".startswith(text)


def test_format_binary_date_time_errors():
    raw = _binary(datetime(2022, 1, 2, 3, 4, 5))
    with pytest.raises(ValueError, match="illegal DATETIME length 20"):
        format_binary_date_time(raw, 20)
    with pytest.raises(ValueError, match="illegal DATE packet length 5"):
        format_binary_date_time(raw[:5], 10)


def test_format_binary_time_empty():
    assert format_binary_time(b"", 8) == "00:00:00"


def test_format_binary_time_values():
    raw = bytes([0]) + (0).to_bytes(4, "little") + bytes([3, 4, 5])
    assert format_binary_time(raw, 8) == "03:04:05"
    negative = bytes([1]) + (1).to_bytes(4, "little") + bytes([2, 3, 4])
    assert format_binary_time(negative, 8) == "-26:03:04"
    with_micro = raw + (123456).to_bytes(4, "little")
    assert format_binary_time(with_micro, 12) == "03:04:05.123"
    assert format_binary_time(with_micro, 15) == "03:04:05.123456"


def test_format_binary_time_errors():
    raw = bytes([0]) + (0).to_bytes(4, "little") + bytes([3, 4, 5])
    with pytest.raises(ValueError, match="illegal TIME length 9"):
        format_binary_time(raw, 9)
    with pytest.raises(ValueError, match="invalid TIME packet length 7"):
        format_binary_time(raw[:7], 8)