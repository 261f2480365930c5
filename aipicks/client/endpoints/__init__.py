"""Declarative REST endpoint specs and response adapters."""

from . import candles, patterns, picks
from .patterns import PatternDetectionResponse

__all__ = ["candles", "patterns", "picks", "PatternDetectionResponse"]
