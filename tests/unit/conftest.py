"""Shared fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from aipicks.client.models import Bar, Finding

START = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _bar(i: int, close: float | None = None, volume: float = 1000.0) -> Bar:
    close = 100.0 + i if close is None else close
    return Bar(
        timestamp=START + timedelta(days=i),
        open=Decimal(str(close - 0.5)),
        high=Decimal(str(close + 1)),
        low=Decimal(str(close - 1)),
        close=Decimal(str(close)),
        volume=Decimal(str(volume)),
    )


@pytest.fixture
def make_bar() -> Callable[..., Bar]:
    """Daily bar ``i`` days after 2025-01-01, closing at ``100 + i`` by default."""
    return _bar


@pytest.fixture
def make_bars() -> Callable[[int, int], list[Bar]]:
    def factory(count: int, start: int = 0) -> list[Bar]:
        return [_bar(i) for i in range(start, start + count)]

    return factory


@pytest.fixture
def make_finding() -> Callable[..., Finding]:
    def factory(
        end_index: int,
        *,
        start_index: int | None = None,
        pattern_type: str = "double_bottom",
        direction: str = "bullish",
        confidence: float = 0.8,
    ) -> Finding:
        return Finding(
            pattern_type=pattern_type,
            direction=direction,
            confidence=confidence,
            start_index=end_index if start_index is None else start_index,
            end_index=end_index,
            price_at_detection=Decimal("100"),
        )

    return factory
