"""Core enumerations shared across the client.

Architecture:
    This module defines the standardized enums used throughout the library.
    String enums serialize straight onto the wire (query params, JSON bodies)
    and compare equal to the raw strings the backend sends back.

Key Types:
    - Interval: Chart intervals supported by the backend
    - Direction: Bias of a detected pattern
    - FeedState: Lifecycle state of a StreamingSeriesFeed
    - LiveKeyMode: Which parts of the subscription key the live channel sees
    - SubscriptionTier: Account plan levels

See Also:
    - StreamingSeriesFeed: Uses Interval, FeedState and LiveKeyMode
    - Finding: Uses Direction
"""

from enum import Enum
from typing import Optional

# Conversion mapping
_SECONDS_MAP = {
    "1m": 60,
    "5m": 300,
    "15m": 900,
    "1h": 3600,
    "4h": 14400,
    "1d": 86400,
    "1w": 604800,
}


class Interval(str, Enum):
    """Chart intervals accepted by the history, detection and live endpoints."""

    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"
    W1 = "1w"

    @property
    def seconds(self) -> int:
        """Number of seconds in this interval."""
        return _SECONDS_MAP[self.value]

    @property
    def milliseconds(self) -> int:
        """Number of milliseconds in this interval."""
        return self.seconds * 1000

    @classmethod
    def from_seconds(cls, seconds: int) -> Optional["Interval"]:
        """Get interval from seconds value. Returns None if no match."""
        for interval in cls:
            if interval.seconds == seconds:
                return interval
        return None

    @classmethod
    def from_str(cls, value: str) -> Optional["Interval"]:
        """Get interval from string value. Returns None if no match."""
        try:
            return cls(value)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


class Direction(str, Enum):
    """Directional bias reported for a finding."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"

    def __str__(self) -> str:
        return self.value


class FeedState(str, Enum):
    """Lifecycle states of a StreamingSeriesFeed.

    CLOSED -> OPENING on open(); OPENING -> LIVE once the initial fetch and
    detection succeed; OPENING -> CLOSED_WITH_ERROR if either fails;
    LIVE -> CLOSED on close(). RECONNECTING is only entered when a reconnect
    policy is enabled and the live channel drops.
    """

    CLOSED = "closed"
    OPENING = "opening"
    LIVE = "live"
    RECONNECTING = "reconnecting"
    CLOSED_WITH_ERROR = "closed_with_error"

    @property
    def is_active(self) -> bool:
        return self in (FeedState.OPENING, FeedState.LIVE, FeedState.RECONNECTING)

    def __str__(self) -> str:
        return self.value


class LiveKeyMode(str, Enum):
    """How a subscription key maps onto the live update channel.

    SYMBOL matches the backend's current channel, which is addressed by
    symbol only. SYMBOL_INTERVAL also sends the interval and drops messages
    tagged with a different one.
    """

    SYMBOL = "symbol"
    SYMBOL_INTERVAL = "symbol_interval"

    def __str__(self) -> str:
        return self.value


class SubscriptionTier(str, Enum):
    """Account plan levels."""

    FREE = "free"
    PRO = "pro"
    PREMIUM = "premium"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def price(self) -> str:
        """Monthly price label."""
        return _TIER_PRICES[self.value]

    def __str__(self) -> str:
        return self.value


_TIER_PRICES = {
    "free": "$0/month",
    "pro": "$29/month",
    "premium": "$99/month",
}
