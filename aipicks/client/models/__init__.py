"""Data models for bars, findings, picks, accounts and feed events.

Architecture:
    Wire-facing models are Pydantic v2 models; everything decoded from the
    backend is frozen so a snapshot handed to a subscriber cannot change
    under it. ``UsageStats`` is the one mutable model (daily counters).

Model Categories:
    - Market Data: Bar, BarSeries
    - Patterns: Finding
    - Picks: StockPick, PicksResponse
    - Account: User, SubscriptionLimits, UsageStats
    - Feed Events: FeedSnapshot, FeedError, SubscriptionKey, LiveKey
"""

from .account import TIER_LIMITS, UNLIMITED, SubscriptionLimits, UsageStats, User
from .bar import Bar
from .events import FeedError, FeedSnapshot, LiveKey, SubscriptionKey
from .finding import Finding
from .pick import PicksResponse, StockPick
from .series import BarSeries

__all__ = [
    "Bar",
    "BarSeries",
    "Finding",
    "FeedError",
    "FeedSnapshot",
    "LiveKey",
    "SubscriptionKey",
    "PicksResponse",
    "StockPick",
    "SubscriptionLimits",
    "TIER_LIMITS",
    "UNLIMITED",
    "UsageStats",
    "User",
]
