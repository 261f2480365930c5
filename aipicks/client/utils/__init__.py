"""Utility functions."""

from .indicators import NEUTRAL_CONTEXT, build_context, ema, macd, rsi, volume_ratio

__all__ = ["NEUTRAL_CONTEXT", "build_context", "ema", "macd", "rsi", "volume_ratio"]
