"""Pattern detectors."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Protocol

from ..core import Interval, InvalidRequestError, normalize_symbol, parse_interval
from ..endpoints import patterns
from ..io.rest import HTTPClient, RestRunner
from ..models import Bar, Finding

logger = logging.getLogger(__name__)


class PatternDetector(Protocol):
    """Detect patterns over a bar window."""

    async def detect(
        self,
        symbol: str,
        interval: Interval,
        bars: Sequence[Bar],
        context: Mapping[str, float],
    ) -> list[Finding]: ...


class HTTPPatternDetector:
    """Detector backed by the external pattern service."""

    def __init__(self, http: HTTPClient) -> None:
        self._runner = RestRunner(http)
        self._detect_adapter = patterns.DetectAdapter()
        self._types_adapter = patterns.PatternTypesAdapter()

    async def detect(
        self,
        symbol: str,
        interval: Interval | str,
        bars: Sequence[Bar],
        context: Mapping[str, float] | None = None,
    ) -> list[Finding]:
        if not bars:
            raise InvalidRequestError("Cannot detect patterns over an empty series")
        params = {
            "symbol": normalize_symbol(symbol),
            "interval": parse_interval(interval),
            "bars": bars,
            "context": context or {},
        }
        result = await self._runner.run(
            spec=patterns.DETECT_SPEC, adapter=self._detect_adapter, params=params
        )
        logger.debug(
            "Detection completed",
            extra={
                "symbol": params["symbol"],
                "patterns": len(result.patterns),
                "detection_time_ms": result.detection_time_ms,
            },
        )
        return list(result.patterns)

    async def pattern_types(self) -> list[str]:
        """Pattern categories the service can detect."""
        return await self._runner.run(
            spec=patterns.PATTERN_TYPES_SPEC, adapter=self._types_adapter, params={}
        )
