"""WebSocket transport yielding decoded JSON messages from one connection."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any

import websockets

from ...core.exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportConfig:
    ping_interval: float | None = 30
    ping_timeout: float | None = 10
    open_timeout: float | None = 10
    max_size: int | None = 2**20
    max_queue: int | None = 32


class WebSocketTransport:
    """Single-connection WebSocket transport.

    ``stream`` runs one connection to completion: it yields each message as
    parsed JSON (or the raw text when it is not JSON), returns when the
    server closes cleanly and raises ``TransportError`` when the connection
    fails or drops. Reconnecting is the caller's decision.
    """

    def __init__(self, config: TransportConfig | None = None) -> None:
        self._conf = config or TransportConfig()

    def _connect_kwargs(self) -> dict[str, Any]:
        return {
            "ping_interval": self._conf.ping_interval,
            "ping_timeout": self._conf.ping_timeout,
            "open_timeout": self._conf.open_timeout,
            "max_size": self._conf.max_size,
            "max_queue": self._conf.max_queue,
        }

    async def stream(self, url: str) -> AsyncIterator[Any]:
        try:
            async with websockets.connect(url, **self._connect_kwargs()) as websocket:
                logger.debug(f"WebSocket connected: {url}")
                async for message in websocket:
                    if isinstance(message, bytes):
                        logger.debug(f"Ignoring {len(message)} byte binary frame from {url}")
                        continue
                    try:
                        yield json.loads(message)
                    except json.JSONDecodeError:
                        yield message
            logger.debug(f"WebSocket closed by server: {url}")
        except asyncio.CancelledError:
            raise
        except websockets.exceptions.ConnectionClosed as e:
            raise TransportError(f"WebSocket connection to {url} closed: {e}") from e
        except (OSError, asyncio.TimeoutError, websockets.exceptions.WebSocketException) as e:
            raise TransportError(f"WebSocket connection to {url} failed: {e}") from e
