"""StockPicksClient facade wiring settings, HTTP sessions and collaborators.

Architecture:
    This module implements the Facade pattern over the individual clients.
    StockPicksClient handles:
    - Settings resolution (explicit settings or ``AIPICKS_*`` environment)
    - One HTTP session per backend (main API, pattern service)
    - Construction of StreamingSeriesFeed instances with injected collaborators
    - Resource lifecycle management

Design Decisions:
    - No process-wide singleton: every feed receives its collaborators
      explicitly, so two feeds never share mutable state
    - Collaborator injection allows testing with fakes
    - Context manager pattern ensures HTTP sessions and feeds are closed

See Also:
    - StreamingSeriesFeed: The live series component
    - ClientSettings: Endpoint configuration
"""

from __future__ import annotations

import logging

from ..clients import (
    AccountService,
    AuthSession,
    HistoryFetcher,
    HTTPHistoryFetcher,
    HTTPPatternDetector,
    PatternDetector,
    PicksBoard,
    PicksClient,
    StreamingSeriesFeed,
)
from ..config import ClientSettings
from ..core import Interval, LiveKeyMode
from ..io.rest import HTTPClient
from ..io.ws import LiveChannel, ReconnectPolicy, TransportConfig, WebSocketLiveChannel

logger = logging.getLogger(__name__)


class StockPicksClient:
    """Single entry point for picks, history, pattern detection and live feeds.

    Example:
        >>> async with StockPicksClient() as client:
        ...     picks = await client.picks.top_picks(limit=10)
        ...     feed = client.feed()
        ...     await feed.open("AAPL", Interval.D1)
        ...     print(feed.findings)
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        history: HistoryFetcher | None = None,
        detector: PatternDetector | None = None,
        channel: LiveChannel | None = None,
        transport_config: TransportConfig | None = None,
    ) -> None:
        self.settings = settings or ClientSettings.from_env()
        self.session = AuthSession(self.settings.auth_token)
        self.account = AccountService(self.session, email=self.settings.user_email)

        self._api_http = HTTPClient(
            self.settings.api_url,
            timeout=self.settings.http_timeout,
            auth_token=self.settings.auth_token,
            headers=self.settings.extra_headers,
        )
        self._pattern_http = HTTPClient(
            self.settings.pattern_service_url,
            timeout=self.settings.http_timeout,
            auth_token=self.settings.auth_token,
            headers=self.settings.extra_headers,
        )
        self._api_http.add_response_hook(self.account.record_response)
        self._pattern_http.add_response_hook(self.account.record_response)

        self.picks = PicksClient(self._api_http)
        self.history: HistoryFetcher = history or HTTPHistoryFetcher(self._api_http)
        self._http_detector = HTTPPatternDetector(self._pattern_http)
        self.detector: PatternDetector = detector or self._http_detector
        self.channel: LiveChannel = channel or WebSocketLiveChannel(
            self.settings.live_url_template, transport_config=transport_config
        )
        self._feeds: list[StreamingSeriesFeed] = []
        self._closed = False

    def feed(
        self,
        *,
        capacity: int | None = None,
        key_mode: LiveKeyMode = LiveKeyMode.SYMBOL,
        reconnect: ReconnectPolicy | None = None,
    ) -> StreamingSeriesFeed:
        """Create an independent feed wired to this client's collaborators."""
        feed = StreamingSeriesFeed(
            self.history,
            self.detector,
            self.channel,
            capacity=capacity or self.settings.series_capacity,
            key_mode=key_mode,
            reconnect=reconnect,
            on_findings=self.account.record_patterns,
        )
        self._feeds.append(feed)
        return feed

    async def open_feed(
        self,
        symbol: str,
        interval: Interval | str = Interval.D1,
        **feed_kwargs,
    ) -> StreamingSeriesFeed:
        """Create a feed and open it in one call."""
        feed = self.feed(**feed_kwargs)
        await feed.open(symbol, interval)
        return feed

    def picks_board(self, *, limit: int | None = None) -> PicksBoard:
        return PicksBoard(self.picks, limit=limit or self.settings.picks_limit)

    async def pattern_types(self) -> list[str]:
        return await self._http_detector.pattern_types()

    async def close(self) -> None:
        if self._closed:
            return
        for feed in self._feeds:
            await feed.close()
        self._feeds.clear()
        await self._api_http.close()
        await self._pattern_http.close()
        self._closed = True
        logger.debug("StockPicksClient closed")

    async def __aenter__(self) -> StockPicksClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
