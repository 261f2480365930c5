"""Unit tests for HTTPPatternDetector."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from aipicks.client.clients import HTTPPatternDetector
from aipicks.client.config import DETECT_PATH, PATTERN_TYPES_PATH
from aipicks.client.core import DecodeError, Direction, Interval, InvalidRequestError

RESPONSE = {
    "symbol": "AAPL",
    "timeframe": "1h",
    "patterns": [
        {
            "pattern_type": "bull_flag",
            "direction": "bullish",
            "confidence": 0.82,
            "strength": 3,
            "start_index": 1,
            "end_index": 4,
            "price_at_detection": 104.0,
            "context": {"rsi": 61.2},
        },
        {
            "pattern_type": "doji",
            "direction": "indecisive",
            "confidence": 0.4,
            "start_index": 4,
            "end_index": 4,
            "price_at_detection": 104.0,
        },
    ],
    "total_patterns": 2,
    "detection_time_ms": 12.5,
}


def _http(post=None, get=None) -> MagicMock:
    http = MagicMock()
    http.post = AsyncMock(return_value=post)
    http.get = AsyncMock(return_value=get)
    return http


@pytest.mark.asyncio
async def test_detect_posts_window_and_context(make_bars):
    http = _http(post=RESPONSE)
    bars = make_bars(5)
    context = {"rsi": 61.2, "macd": 0.4, "volume_ratio": 1.1}

    findings = await HTTPPatternDetector(http).detect("aapl", Interval.H1, bars, context)

    args, kwargs = http.post.call_args
    assert args[0] == DETECT_PATH
    body = kwargs["json"]
    assert body["symbol"] == "AAPL"
    assert body["timeframe"] == "1h"
    assert len(body["candles"]) == 5
    assert body["candles"][0]["close"] == 100.0
    assert body["context"] == context
    assert kwargs["headers"] == {"Content-Type": "application/json"}

    assert [f.pattern_type for f in findings] == ["bull_flag", "doji"]
    assert findings[0].direction == Direction.BULLISH
    assert findings[0].strength == 3
    assert findings[1].direction == Direction.NEUTRAL


@pytest.mark.asyncio
async def test_detect_without_patterns_key(make_bars):
    http = _http(post={"symbol": "AAPL"})
    assert await HTTPPatternDetector(http).detect("AAPL", "1d", make_bars(3)) == []


@pytest.mark.asyncio
async def test_detect_rejects_empty_window():
    http = _http(post=RESPONSE)
    with pytest.raises(InvalidRequestError):
        await HTTPPatternDetector(http).detect("AAPL", Interval.D1, [], {})
    http.post.assert_not_called()


@pytest.mark.asyncio
async def test_detect_invalid_finding_is_decode_error(make_bars):
    bad = {"patterns": [{**RESPONSE["patterns"][0], "confidence": 7}]}
    with pytest.raises(DecodeError):
        await HTTPPatternDetector(_http(post=bad)).detect("AAPL", "1d", make_bars(5), {})


@pytest.mark.asyncio
async def test_pattern_types():
    http = _http(get={"patterns": ["head_and_shoulders", "double_top"]})
    types = await HTTPPatternDetector(http).pattern_types()
    assert types == ["head_and_shoulders", "double_top"]
    assert http.get.call_args.args[0] == PATTERN_TYPES_PATH


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{}, {"patterns": "all"}])
async def test_pattern_types_bad_shape(payload):
    with pytest.raises(DecodeError):
        await HTTPPatternDetector(_http(get=payload)).pattern_types()
