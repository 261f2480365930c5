"""Unit tests for history fetchers."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from aipicks.client.clients import HTTPHistoryFetcher, SyntheticHistoryFetcher
from aipicks.client.config import CANDLES_PATH
from aipicks.client.core import DecodeError, Interval, InvalidRequestError

ROW = {
    "timestamp": "2025-01-01T00:00:00Z",
    "open": 100,
    "high": 101,
    "low": 99,
    "close": 100.5,
    "volume": 1200,
}


def _http(payload) -> MagicMock:
    http = MagicMock()
    http.get = AsyncMock(return_value=payload)
    return http


class TestHTTPHistoryFetcher:
    @pytest.mark.asyncio
    async def test_fetch_list(self):
        http = _http([ROW, {**ROW, "timestamp": "2025-01-02T00:00:00Z"}])
        bars = await HTTPHistoryFetcher(http).fetch("aapl", Interval.D1, 2)

        assert len(bars) == 2
        http.get.assert_awaited_once_with(
            CANDLES_PATH, params={"symbol": "AAPL", "timeframe": "1d", "limit": 2}, headers=None
        )

    @pytest.mark.asyncio
    async def test_fetch_envelope(self):
        http = _http({"symbol": "AAPL", "candles": [ROW]})
        bars = await HTTPHistoryFetcher(http).fetch("AAPL", "1h", 10)
        assert len(bars) == 1
        assert http.get.call_args.kwargs["params"]["timeframe"] == "1h"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"error": "nope"}, [{"close": 1}], "text"])
    async def test_unexpected_shape_is_decode_error(self, payload):
        with pytest.raises(DecodeError):
            await HTTPHistoryFetcher(_http(payload)).fetch("AAPL", Interval.D1, 10)

    @pytest.mark.asyncio
    async def test_invalid_arguments_not_sent(self):
        http = _http([])
        fetcher = HTTPHistoryFetcher(http)
        with pytest.raises(InvalidRequestError):
            await fetcher.fetch("", Interval.D1, 10)
        with pytest.raises(InvalidRequestError):
            await fetcher.fetch("AAPL", "13m", 10)
        with pytest.raises(InvalidRequestError):
            await fetcher.fetch("AAPL", Interval.D1, 0)
        http.get.assert_not_called()


class TestSyntheticHistoryFetcher:
    NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_spacing_and_end(self):
        fetcher = SyntheticHistoryFetcher(seed=1, now=self.NOW)
        bars = await fetcher.fetch("AAPL", Interval.H1, 24)

        assert len(bars) == 24
        assert bars[-1].timestamp == self.NOW
        assert bars[0].timestamp == self.NOW - timedelta(hours=23)
        for bar in bars:
            assert bar.low <= bar.close <= bar.high
            assert bar.low > 0

    @pytest.mark.asyncio
    async def test_seed_is_reproducible(self):
        a = await SyntheticHistoryFetcher(seed=42, now=self.NOW).fetch("AAPL", "1d", 10)
        b = await SyntheticHistoryFetcher(seed=42, now=self.NOW).fetch("AAPL", "1d", 10)
        assert a == b

    @pytest.mark.asyncio
    async def test_walk_is_continuous(self):
        bars = await SyntheticHistoryFetcher(seed=3, now=self.NOW).fetch("AAPL", "1d", 5)
        assert bars[0].open == 150
        for prev, cur in zip(bars, bars[1:]):
            assert cur.open == prev.close
