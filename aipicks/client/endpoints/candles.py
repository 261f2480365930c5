"""Candle history endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from ..config import CANDLES_PATH
from ..io.rest import ResponseAdapter, RestEndpointSpec
from ..models import Bar


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for the candles endpoint."""
    return {
        "symbol": params["symbol"],
        "timeframe": params["interval"].value,
        "limit": int(params["limit"]),
    }


SPEC = RestEndpointSpec(
    id="candles",
    method="GET",
    build_path=lambda _params: CANDLES_PATH,
    build_query=build_query,
)


class Adapter(ResponseAdapter):
    """Parse a bare candle list or a ``{"candles": [...]}`` envelope into bars."""

    def parse(self, response: Any, params: dict[str, Any]) -> list[Bar]:
        rows = response.get("candles") if isinstance(response, dict) else response
        if not isinstance(rows, list):
            raise ValueError("expected a list of candles")
        return [Bar.model_validate(row) for row in rows]
