"""Encoding and decoding of the primitive values used by the MySQL wire protocol.

Encoders return fresh ``bytes``.  Decoders take a buffer and a starting
position and return ``(value, next_position)``; they raise
:class:`DecodeError` when the buffer is too short for the value.
"""

from __future__ import annotations

__all__ = [
    "DecodeError",
    "len_enc_int_size",
    "encode_len_enc_int",
    "len_enc_string_size",
    "encode_len_enc_string",
    "encode_null_string",
    "encode_uint16",
    "encode_uint32",
    "encode_uint64",
    "read_byte",
    "read_bytes",
    "read_null_string",
    "read_eof_string",
    "read_uint16",
    "read_uint32",
    "read_uint64",
    "read_len_enc_int",
    "read_len_enc_string",
    "read_len_enc_bytes",
    "skip_len_enc_string",
]

_MAX_UINT64 = (1 << 64) - 1


class DecodeError(ValueError):
    """Raised when a buffer does not hold the value being read."""


def _as_bytes(value: str | bytes | bytearray) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _as_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="surrogateescape")


def _check_uint64(value: int) -> None:
    if value < 0 or value > _MAX_UINT64:
        raise ValueError(f"value {value} is not an unsigned 64-bit integer")


def len_enc_int_size(value: int) -> int:
    """Return how many bytes the length-encoded form of ``value`` takes."""
    _check_uint64(value)
    if value < 251:
        return 1
    if value < 1 << 16:
        return 3
    if value < 1 << 24:
        return 4
    return 9


def encode_len_enc_int(value: int) -> bytes:
    """Encode ``value`` as a length-encoded integer."""
    _check_uint64(value)
    if value < 251:
        return bytes([value])
    if value < 1 << 16:
        return b"\xfc" + value.to_bytes(2, "little")
    if value < 1 << 24:
        return b"\xfd" + value.to_bytes(3, "little")
    return b"\xfe" + value.to_bytes(8, "little")


def len_enc_string_size(value: str | bytes) -> int:
    """Return the size of ``value`` written as a length-encoded string."""
    length = len(_as_bytes(value))
    return len_enc_int_size(length) + length


def encode_len_enc_string(value: str | bytes) -> bytes:
    """Encode ``value`` prefixed with its length-encoded size."""
    raw = _as_bytes(value)
    return encode_len_enc_int(len(raw)) + raw


def encode_null_string(value: str | bytes) -> bytes:
    """Encode ``value`` followed by a terminating zero byte."""
    return _as_bytes(value) + b"\x00"


def encode_uint16(value: int) -> bytes:
    """Encode an unsigned 16-bit integer, little endian."""
    return value.to_bytes(2, "little")


def encode_uint32(value: int) -> bytes:
    """Encode an unsigned 32-bit integer, little endian."""
    return value.to_bytes(4, "little")


def encode_uint64(value: int) -> bytes:
    """Encode an unsigned 64-bit integer, little endian."""
    return value.to_bytes(8, "little")


def read_byte(data: bytes, pos: int) -> tuple[int, int]:
    """Read one byte at ``pos``."""
    if pos >= len(data):
        raise DecodeError(f"no byte at position {pos}")
    return data[pos], pos + 1


def read_bytes(data: bytes, pos: int, size: int) -> tuple[bytes, int]:
    """Read ``size`` bytes starting at ``pos``."""
    if pos + size - 1 >= len(data):
        raise DecodeError(f"cannot read {size} bytes at position {pos}")
    return bytes(data[pos : pos + size]), pos + size


def read_null_string(data: bytes, pos: int) -> tuple[str, int]:
    """Read a zero-terminated string starting at ``pos``."""
    end = bytes(data).find(b"\x00", pos)
    if end == -1:
        raise DecodeError(f"no string terminator after position {pos}")
    return _as_text(bytes(data[pos:end])), end + 1


def read_eof_string(data: bytes, pos: int) -> tuple[str, int]:
    """Read everything from ``pos`` to the end of the buffer as a string."""
    return _as_text(bytes(data[pos:])), len(data)


def _read_fixed(data: bytes, pos: int, width: int) -> tuple[int, int]:
    if pos + width - 1 >= len(data):
        raise DecodeError(f"cannot read {width}-byte integer at position {pos}")
    return int.from_bytes(data[pos : pos + width], "little"), pos + width


def read_uint16(data: bytes, pos: int) -> tuple[int, int]:
    """Read an unsigned little-endian 16-bit integer."""
    return _read_fixed(data, pos, 2)


def read_uint32(data: bytes, pos: int) -> tuple[int, int]:
    """Read an unsigned little-endian 32-bit integer."""
    return _read_fixed(data, pos, 4)


def read_uint64(data: bytes, pos: int) -> tuple[int, int]:
    """Read an unsigned little-endian 64-bit integer."""
    return _read_fixed(data, pos, 8)


_LEN_ENC_WIDTHS = {0xFC: 2, 0xFD: 3, 0xFE: 8}


def read_len_enc_int(data: bytes, pos: int) -> tuple[int, int]:
    """Read a length-encoded integer."""
    if pos >= len(data):
        raise DecodeError(f"no length-encoded integer at position {pos}")
    first = data[pos]
    width = _LEN_ENC_WIDTHS.get(first)
    if width is None:
        return first, pos + 1
    if pos + width >= len(data):
        raise DecodeError(f"truncated length-encoded integer at position {pos}")
    start = pos + 1
    return int.from_bytes(data[start : start + width], "little"), start + width


def _len_enc_span(data: bytes, pos: int) -> tuple[int, int]:
    size, start = read_len_enc_int(data, pos)
    if start + size - 1 >= len(data):
        raise DecodeError(f"truncated length-encoded string at position {pos}")
    return start, start + size


def read_len_enc_string(data: bytes, pos: int) -> tuple[str, int]:
    """Read a length-encoded string."""
    start, end = _len_enc_span(data, pos)
    return _as_text(bytes(data[start:end])), end


def read_len_enc_bytes(data: bytes, pos: int) -> tuple[bytes, int]:
    """Read a length-encoded string as a copy of its bytes."""
    start, end = _len_enc_span(data, pos)
    return bytes(data[start:end]), end


def skip_len_enc_string(data: bytes, pos: int) -> int:
    """Return the position just after the length-encoded string at ``pos``."""
    _, end = _len_enc_span(data, pos)
    return end