"""High-level clients: history, detection, picks, account and the series feed."""

from .account import AccountService, AuthSession
from .detector import HTTPPatternDetector, PatternDetector
from .history import HistoryFetcher, HTTPHistoryFetcher, SyntheticHistoryFetcher
from .picks import PicksBoard, PicksClient
from .series_feed import StreamingSeriesFeed

__all__ = [
    "AccountService",
    "AuthSession",
    "HistoryFetcher",
    "HTTPHistoryFetcher",
    "SyntheticHistoryFetcher",
    "PatternDetector",
    "HTTPPatternDetector",
    "PicksClient",
    "PicksBoard",
    "StreamingSeriesFeed",
]
