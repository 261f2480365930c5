"""Indicator context sent alongside bars to the pattern service."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import Bar

RSI_PERIOD = 14
MACD_FAST = 12
MACD_SLOW = 26
VOLUME_LOOKBACK = 20

NEUTRAL_CONTEXT = {"rsi": 50.0, "macd": 0.0, "volume_ratio": 1.0}


def rsi(closes: Sequence[float], period: int = RSI_PERIOD) -> float | None:
    """Wilder's RSI over ``closes``; None with fewer than ``period + 1`` values."""
    if len(closes) <= period:
        return None
    gains = losses = 0.0
    for prev, cur in zip(closes[:period], closes[1 : period + 1], strict=True):
        change = cur - prev
        gains += max(change, 0.0)
        losses += max(-change, 0.0)
    avg_gain = gains / period
    avg_loss = losses / period
    for prev, cur in zip(closes[period:-1], closes[period + 1 :], strict=True):
        change = cur - prev
        avg_gain = (avg_gain * (period - 1) + max(change, 0.0)) / period
        avg_loss = (avg_loss * (period - 1) + max(-change, 0.0)) / period
    if avg_loss == 0:
        return 100.0 if avg_gain > 0 else 50.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


def ema(values: Sequence[float], period: int) -> float | None:
    """Exponential moving average seeded with the first ``period`` SMA."""
    if len(values) < period:
        return None
    k = 2.0 / (period + 1)
    current = sum(values[:period]) / period
    for v in values[period:]:
        current = v * k + current * (1 - k)
    return current


def macd(closes: Sequence[float], fast: int = MACD_FAST, slow: int = MACD_SLOW) -> float | None:
    """MACD line (fast EMA minus slow EMA)."""
    fast_ema = ema(closes, fast)
    slow_ema = ema(closes, slow)
    if fast_ema is None or slow_ema is None:
        return None
    return fast_ema - slow_ema


def volume_ratio(volumes: Sequence[float], lookback: int = VOLUME_LOOKBACK) -> float | None:
    """Last volume over the mean of the ``lookback`` volumes before it."""
    if len(volumes) < 2:
        return None
    window = volumes[-(lookback + 1) : -1]
    mean = sum(window) / len(window)
    if mean == 0:
        return None
    return volumes[-1] / mean


def build_context(bars: Sequence[Bar]) -> dict[str, float]:
    """Compute the ``rsi``/``macd``/``volume_ratio`` context for a bar window.

    Values that cannot be computed from a short window fall back to
    ``NEUTRAL_CONTEXT``.
    """
    closes = [float(b.close) for b in bars]
    volumes = [float(b.volume) for b in bars]
    computed = {
        "rsi": rsi(closes),
        "macd": macd(closes),
        "volume_ratio": volume_ratio(volumes),
    }
    return {
        name: round(value, 6) if value is not None else NEUTRAL_CONTEXT[name]
        for name, value in computed.items()
    }
