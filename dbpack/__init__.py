"""MySQL wire-protocol value codecs, date/time conversion, reserved-word quoting and SQL text helpers."""

__version__ = "0.1.0"

__all__ = [
    "codec",
    "datetimes",
    "keywords",
    "sqltext",
    "values",
]