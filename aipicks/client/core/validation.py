"""Request argument validation shared by the clients and the feed."""

from __future__ import annotations

import re

from .enums import Interval
from .exceptions import InvalidRequestError

_SYMBOL_RE = re.compile(r"^[A-Z0-9][A-Z0-9.\-=^]*$")


def normalize_symbol(symbol: str) -> str:
    """Strip and upper-case a ticker; raise InvalidRequestError if unusable."""
    if not isinstance(symbol, str) or not symbol.strip():
        raise InvalidRequestError("Symbol must be a non-empty string")
    value = symbol.strip().upper()
    if not _SYMBOL_RE.match(value):
        raise InvalidRequestError(f"Invalid symbol: {symbol!r}")
    return value


def parse_interval(interval: Interval | str) -> Interval:
    """Coerce to Interval; raise InvalidRequestError outside the supported set."""
    if isinstance(interval, Interval):
        return interval
    parsed = Interval.from_str(interval) if isinstance(interval, str) else None
    if parsed is None:
        supported = ", ".join(i.value for i in Interval)
        raise InvalidRequestError(f"Unsupported interval {interval!r} (expected one of {supported})")
    return parsed


def validate_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidRequestError(f"limit must be a positive integer, got {limit!r}")
    return limit
