"""AI Picks client - stock picks, candle history, pattern overlays and live feeds."""

from .api import StockPicksClient
from .clients import (
    AccountService,
    AuthSession,
    HistoryFetcher,
    HTTPHistoryFetcher,
    HTTPPatternDetector,
    PatternDetector,
    PicksBoard,
    PicksClient,
    StreamingSeriesFeed,
    SyntheticHistoryFetcher,
)
from .config import ClientSettings
from .core import (
    ClientError,
    DecodeError,
    Direction,
    ErrorKind,
    FeedState,
    Interval,
    InvalidRequestError,
    LiveKeyMode,
    RateLimitError,
    ServerError,
    SubscriptionTier,
    TransportError,
)
from .io import (
    HTTPClient,
    LiveChannel,
    ReconnectPolicy,
    TransportConfig,
    WebSocketLiveChannel,
)
from .models import (
    Bar,
    BarSeries,
    FeedError,
    FeedSnapshot,
    Finding,
    LiveKey,
    PicksResponse,
    StockPick,
    SubscriptionKey,
    SubscriptionLimits,
    UsageStats,
    User,
)

__version__ = "0.1.0"

__all__ = [
    # Facade
    "StockPicksClient",
    "ClientSettings",
    # Core enums
    "Interval",
    "Direction",
    "FeedState",
    "LiveKeyMode",
    "SubscriptionTier",
    # Errors
    "ErrorKind",
    "ClientError",
    "InvalidRequestError",
    "TransportError",
    "ServerError",
    "RateLimitError",
    "DecodeError",
    # Clients
    "HistoryFetcher",
    "HTTPHistoryFetcher",
    "SyntheticHistoryFetcher",
    "PatternDetector",
    "HTTPPatternDetector",
    "PicksClient",
    "PicksBoard",
    "AccountService",
    "AuthSession",
    "StreamingSeriesFeed",
    # I/O
    "HTTPClient",
    "LiveChannel",
    "WebSocketLiveChannel",
    "TransportConfig",
    "ReconnectPolicy",
    # Models
    "Bar",
    "BarSeries",
    "Finding",
    "FeedError",
    "FeedSnapshot",
    "LiveKey",
    "SubscriptionKey",
    "StockPick",
    "PicksResponse",
    "SubscriptionLimits",
    "UsageStats",
    "User",
]
