"""Precise unit tests for WebSocketTransport.

Tests focus on message parsing, clean close and error mapping.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from websockets.exceptions import ConnectionClosed

from aipicks.client.core import TransportError
from aipicks.client.io.ws.transport import TransportConfig, WebSocketTransport


class MessageIterator:
    """Async iterator over canned frames; an exception instance is raised in place."""

    def __init__(self, messages):
        self._messages = list(messages)
        self._index = 0

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self._index < len(self._messages):
            msg = self._messages[self._index]
            self._index += 1
            if isinstance(msg, Exception):
                raise msg
            return msg
        raise StopAsyncIteration


def _connect_context(ws) -> AsyncMock:
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=ws)
    ctx.__aexit__ = AsyncMock(return_value=None)
    return ctx


async def _collect(transport: WebSocketTransport, url: str = "ws://localhost:8003/ws/AAPL"):
    return [m async for m in transport.stream(url)]


class TestWebSocketTransport:
    """Test WebSocketTransport."""

    def test_init_default_config(self):
        transport = WebSocketTransport()
        assert transport._conf.ping_interval == 30
        assert transport._conf.ping_timeout == 10

    def test_connect_kwargs(self):
        config = TransportConfig(max_size=1024, max_queue=512, open_timeout=3)
        kwargs = WebSocketTransport(config)._connect_kwargs()

        assert kwargs["ping_interval"] == 30
        assert kwargs["ping_timeout"] == 10
        assert kwargs["open_timeout"] == 3
        assert kwargs["max_size"] == 1024
        assert kwargs["max_queue"] == 512

    @pytest.mark.asyncio
    async def test_stream_yields_json_and_raw_messages(self):
        ws = MessageIterator(['{"close": 101.5}', "heartbeat"])
        with patch("websockets.connect", return_value=_connect_context(ws)) as connect:
            messages = await _collect(WebSocketTransport())

        assert messages == [{"close": 101.5}, "heartbeat"]
        assert connect.call_args.args[0] == "ws://localhost:8003/ws/AAPL"
        assert connect.call_args.kwargs["ping_interval"] == 30

    @pytest.mark.asyncio
    async def test_stream_skips_binary_frames(self):
        ws = MessageIterator([b"\x00\x01", '{"n": 1}'])
        with patch("websockets.connect", return_value=_connect_context(ws)):
            messages = await _collect(WebSocketTransport())
        assert messages == [{"n": 1}]

    @pytest.mark.asyncio
    async def test_clean_close_ends_stream(self):
        with patch("websockets.connect", return_value=_connect_context(MessageIterator([]))):
            assert await _collect(WebSocketTransport()) == []

    @pytest.mark.asyncio
    async def test_connection_closed_raises_transport_error(self):
        ws = MessageIterator(['{"n": 1}', ConnectionClosed(None, None)])
        received = []
        with patch("websockets.connect", return_value=_connect_context(ws)):
            with pytest.raises(TransportError):
                async for message in WebSocketTransport().stream("ws://localhost:8003/ws/AAPL"):
                    received.append(message)
        assert received == [{"n": 1}]

    @pytest.mark.asyncio
    async def test_connect_failure_raises_transport_error(self):
        with patch("websockets.connect", side_effect=OSError("connection refused")):
            with pytest.raises(TransportError) as exc_info:
                await _collect(WebSocketTransport())
        assert "connection refused" in str(exc_info.value)
