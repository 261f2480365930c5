"""Unit tests for BarSeries and feed event types."""

import pytest

from aipicks.client.core import ErrorKind, FeedState, Interval, LiveKeyMode, ServerError
from aipicks.client.models import BarSeries, FeedError, FeedSnapshot, LiveKey, SubscriptionKey


class TestBarSeries:
    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            BarSeries(0)

    def test_append_evicts_oldest(self, make_bars):
        series = BarSeries(3)
        bars = make_bars(4)
        evicted = [series.append(b) for b in bars]

        assert evicted == [None, None, None, bars[0]]
        assert series.snapshot() == tuple(bars[1:])
        assert series.last == bars[3]
        assert len(series) == 3

    def test_eviction_is_by_arrival_not_timestamp(self, make_bar):
        series = BarSeries(2)
        series.append(make_bar(5))
        series.append(make_bar(1))
        series.append(make_bar(3))
        assert [b.timestamp for b in series] == [make_bar(1).timestamp, make_bar(3).timestamp]

    def test_version_bumps_on_every_mutation(self, make_bars):
        series = BarSeries(5)
        assert series.version == 0
        series.append(make_bars(1)[0])
        series.replace(make_bars(3))
        series.clear()
        assert series.version == 3
        assert len(series) == 0

    def test_replace_keeps_newest(self, make_bars):
        series = BarSeries(2)
        bars = make_bars(5)
        series.replace(bars)
        assert series.snapshot() == tuple(bars[-2:])

    def test_snapshot_is_immutable_copy(self, make_bars, make_bar):
        series = BarSeries(5)
        series.replace(make_bars(2))
        snap = series.snapshot()
        series.append(make_bar(2))
        assert len(snap) == 2
        assert series[-1] == make_bar(2)


class TestEvents:
    def test_live_key_projection(self):
        key = SubscriptionKey("AAPL", Interval.D1)
        assert key.live_key(LiveKeyMode.SYMBOL) == LiveKey("AAPL")
        assert key.live_key(LiveKeyMode.SYMBOL_INTERVAL) == LiveKey("AAPL", Interval.D1)
        assert str(key) == "AAPL@1d"

    def test_feed_error_from_exception(self):
        error = FeedError.from_exception(ServerError("HTTP 502", status_code=502))
        assert error.kind == ErrorKind.SERVER
        assert error.message == "HTTP 502"
        assert error.user_message == "Server error occurred"

    def test_snapshot_currency(self, make_bars):
        bars = tuple(make_bars(2))
        snap = FeedSnapshot(
            key=SubscriptionKey("AAPL", Interval.D1),
            state=FeedState.LIVE,
            bars=bars,
            series_version=4,
            findings_version=3,
        )
        assert not snap.findings_current
        assert snap.last_bar == bars[-1]
        assert FeedSnapshot(key=None, state=FeedState.CLOSED).last_bar is None
