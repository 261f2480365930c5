"""Candle history fetchers."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Protocol

from ..core import Interval, normalize_symbol, parse_interval, validate_limit
from ..endpoints import candles
from ..io.rest import HTTPClient, RestRunner
from ..models import Bar

logger = logging.getLogger(__name__)


class HistoryFetcher(Protocol):
    """Return the most recent ``limit`` bars for a symbol and interval."""

    async def fetch(self, symbol: str, interval: Interval, limit: int) -> list[Bar]: ...


class HTTPHistoryFetcher:
    """History fetcher backed by the backend's candles endpoint."""

    def __init__(self, http: HTTPClient) -> None:
        self._runner = RestRunner(http)
        self._adapter = candles.Adapter()

    async def fetch(self, symbol: str, interval: Interval | str, limit: int) -> list[Bar]:
        params = {
            "symbol": normalize_symbol(symbol),
            "interval": parse_interval(interval),
            "limit": validate_limit(limit),
        }
        bars = await self._runner.run(spec=candles.SPEC, adapter=self._adapter, params=params)
        logger.debug(
            "Fetched history",
            extra={"symbol": params["symbol"], "interval": params["interval"].value, "bars": len(bars)},
        )
        return bars


class SyntheticHistoryFetcher:
    """Offline random-walk history for demos and tests.

    Bars are spaced one interval apart and end at ``now``; a fixed ``seed``
    makes the walk reproducible.
    """

    def __init__(
        self,
        *,
        start_price: float = 150.0,
        max_move: float = 5.0,
        seed: int | None = None,
        now: datetime | None = None,
    ) -> None:
        self._start_price = start_price
        self._max_move = max_move
        self._rng = random.Random(seed)
        self._now = now

    async def fetch(self, symbol: str, interval: Interval | str, limit: int) -> list[Bar]:
        normalize_symbol(symbol)
        interval = parse_interval(interval)
        validate_limit(limit)

        step = timedelta(seconds=interval.seconds)
        end = self._now or datetime.now(timezone.utc)
        ts = end - step * (limit - 1)
        price = self._start_price
        bars: list[Bar] = []
        for _ in range(limit):
            open_ = price
            high = open_ + self._rng.uniform(0, self._max_move)
            low = max(open_ - self._rng.uniform(0, self._max_move), 0.01)
            close = self._rng.uniform(low, high)
            bars.append(
                Bar(
                    timestamp=ts,
                    open=_dec(open_),
                    high=_dec(high),
                    low=_dec(low),
                    close=_dec(close),
                    volume=_dec(self._rng.uniform(1_000_000, 10_000_000)),
                )
            )
            ts += step
            price = close
        return bars


def _dec(value: float) -> Decimal:
    return Decimal(str(round(value, 4)))
