"""Small helpers for building SQL text and handling global transaction ids."""

from __future__ import annotations

import re

__all__ = ["mysql_in_params", "pgsql_in_params", "generate_xid", "get_transaction_id"]

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def mysql_in_params(size: int) -> str:
    """Return a parenthesised list of ``size`` MySQL ``?`` placeholders."""
    return "(" + ",".join("?" for _ in range(size)) + ")"


def pgsql_in_params(size: int) -> str:
    """Return a parenthesised list of ``size`` PostgreSQL ``$n`` placeholders."""
    return "(" + ",".join(f"${n}" for n in range(1, size + 1)) + ")"


def generate_xid(addressing: str, tran_id: int) -> str:
    """Build a global transaction id from a server address and a transaction number."""
    return f"{addressing}:{tran_id}"


def get_transaction_id(xid: str) -> int:
    """Extract the transaction number that follows the last ``:`` of ``xid``.

    Returns -1 for an empty id or one ending in ``:``, 0 when the tail is not
    a number, and clamps numbers outside the signed 64-bit range.
    """
    if not xid:
        return -1
    _, _, tail = xid.rpartition(":")
    if not tail:
        return -1
    if not _DECIMAL.fullmatch(tail):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(tail)))