"""Pattern service endpoints: detection and supported pattern types.

The detection request carries the full bar window plus a small indicator
context; the response lists findings indexed into that window.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ..config import DETECT_PATH, PATTERN_TYPES_PATH
from ..io.rest import ResponseAdapter, RestEndpointSpec
from ..models import Finding


class PatternDetectionResponse(BaseModel):
    symbol: str = ""
    timeframe: str = ""
    patterns: list[Finding] = Field(default_factory=list)
    total_patterns: int = 0
    detection_time_ms: float = 0.0


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    """Build the JSON body for a detection request."""
    return {
        "symbol": params["symbol"],
        "timeframe": params["interval"].value,
        "candles": [bar.to_wire() for bar in params["bars"]],
        "context": dict(params.get("context") or {}),
    }


DETECT_SPEC = RestEndpointSpec(
    id="detect_patterns",
    method="POST",
    build_path=lambda _params: DETECT_PATH,
    build_body=build_body,
    build_headers=lambda _params: {"Content-Type": "application/json"},
)

PATTERN_TYPES_SPEC = RestEndpointSpec(
    id="pattern_types",
    method="GET",
    build_path=lambda _params: PATTERN_TYPES_PATH,
)


class DetectAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> PatternDetectionResponse:
        return PatternDetectionResponse.model_validate(response)


class PatternTypesAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> list[str]:
        patterns = response["patterns"]
        if not isinstance(patterns, list):
            raise TypeError("patterns must be a list")
        return [str(p) for p in patterns]
