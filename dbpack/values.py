"""Value helpers for the MySQL protocol: booleans, TLS registry and length-encoded data."""

from __future__ import annotations

import random
import threading
from typing import Any

from dbpack.codec import DecodeError, encode_len_enc_int

__all__ = [
    "read_bool",
    "register_tls_config",
    "deregister_tls_config",
    "get_tls_config",
    "uint64_to_bytes",
    "uint64_to_string",
    "string_to_int",
    "read_length_encoded_integer",
    "read_length_encoded_string",
    "skip_length_encoded_string",
    "append_length_encoded_integer",
    "random_buf",
]

_TRUE_WORDS = frozenset({"1", "true", "TRUE", "True"})
_FALSE_WORDS = frozenset({"0", "false", "FALSE", "False"})

_tls_lock = threading.RLock()
_tls_registry: dict[str, Any] = {}

_NULL_MARKER = 0xFB
_LEN_ENC_WIDTHS = {0xFC: 2, 0xFD: 3, 0xFE: 8}


def read_bool(value: str) -> bool | None:
    """Return the boolean spelled by ``value``, or ``None`` if it is not one."""
    if value in _TRUE_WORDS:
        return True
    if value in _FALSE_WORDS:
        return False
    return None


def register_tls_config(key: str, config: Any) -> None:
    """Register a TLS configuration under ``key``.

    Keys that read as booleans, ``skip-verify`` and ``preferred`` are reserved.
    """
    if read_bool(key) is not None or key.lower() in {"skip-verify", "preferred"}:
        raise ValueError(f"key '{key}' is reserved")
    with _tls_lock:
        _tls_registry[key] = config


def deregister_tls_config(key: str) -> None:
    """Remove the TLS configuration registered under ``key``, if any."""
    with _tls_lock:
        _tls_registry.pop(key, None)


def get_tls_config(key: str) -> Any | None:
    """Return the TLS configuration registered under ``key``, or ``None``."""
    with _tls_lock:
        return _tls_registry.get(key)


def uint64_to_bytes(n: int) -> bytes:
    """Encode an unsigned 64-bit integer as 8 little-endian bytes."""
    if not 0 <= n < 1 << 64:
        raise ValueError(f"value {n} is not an unsigned 64-bit integer")
    return n.to_bytes(8, "little")


def uint64_to_string(n: int) -> bytes:
    """Return the decimal ASCII digits of an unsigned 64-bit integer."""
    if not 0 <= n < 1 << 64:
        raise ValueError(f"value {n} is not an unsigned 64-bit integer")
    return str(n).encode("ascii")


def string_to_int(b: bytes | str) -> int:
    """Read ASCII decimal digits as an unsigned integer, without validation."""
    raw = b.encode("ascii") if isinstance(b, str) else bytes(b)
    value = 0
    for c in raw:
        value = value * 10 + (c - 0x30)
    return value


def read_length_encoded_integer(b: bytes) -> tuple[int, bool, int]:
    """Read a length-encoded integer at the start of ``b``.

    Returns ``(value, is_null, bytes_read)``.  An empty buffer and the 0xFB
    marker both read as NULL.
    """
    if not b:
        return 0, True, 1
    first = b[0]
    if first == _NULL_MARKER:
        return 0, True, 1
    width = _LEN_ENC_WIDTHS.get(first)
    if width is None:
        return first, False, 1
    if len(b) < width + 1:
        raise DecodeError("truncated length-encoded integer")
    return int.from_bytes(bytes(b[1 : 1 + width]), "little"), False, width + 1


def read_length_encoded_string(b: bytes) -> tuple[bytes | None, bool, int]:
    """Read a length-encoded string at the start of ``b``.

    Returns ``(value, is_null, bytes_read)``; ``value`` is ``None`` for NULL.
    Raises :class:`DecodeError` when the string runs past the buffer.
    """
    num, is_null, n = read_length_encoded_integer(b)
    if is_null:
        return None, True, n
    if num < 1:
        return b"", False, n
    end = n + num
    if len(b) < end:
        raise DecodeError(f"length-encoded string needs {end} bytes, buffer holds {len(b)}")
    return bytes(b[n:end]), False, end


def skip_length_encoded_string(b: bytes) -> int:
    """Return how many bytes the length-encoded string at the start of ``b`` takes."""
    num, _, n = read_length_encoded_integer(b)
    if num < 1:
        return n
    end = n + num
    if len(b) < end:
        raise DecodeError(f"length-encoded string needs {end} bytes, buffer holds {len(b)}")
    return end


def append_length_encoded_integer(buf: bytes, n: int) -> bytes:
    """Return ``buf`` followed by ``n`` written as a length-encoded integer."""
    return bytes(buf) + encode_len_enc_int(n)


def random_buf(size: int) -> bytes:
    """Return ``size`` random bytes, each in the printable range 30..126."""
    if size < 0:
        raise ValueError("size must not be negative")
    return bytes(random.randrange(30, 127) for _ in range(size))