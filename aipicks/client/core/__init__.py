"""Core components."""

from .enums import (
    Direction,
    FeedState,
    Interval,
    LiveKeyMode,
    SubscriptionTier,
)
from .exceptions import (
    ClientError,
    DecodeError,
    ErrorKind,
    InvalidRequestError,
    RateLimitError,
    ServerError,
    TransportError,
)
from .validation import normalize_symbol, parse_interval, validate_limit

__all__ = [
    "Interval",
    "Direction",
    "FeedState",
    "LiveKeyMode",
    "SubscriptionTier",
    "ErrorKind",
    "ClientError",
    "InvalidRequestError",
    "TransportError",
    "ServerError",
    "RateLimitError",
    "DecodeError",
    "normalize_symbol",
    "parse_interval",
    "validate_limit",
]
