"""Facade API."""

from .client import StockPicksClient

__all__ = ["StockPicksClient"]
