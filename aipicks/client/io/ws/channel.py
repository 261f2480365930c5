"""Live bar channel: one message per new bar for a subscription."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any, Protocol

import pydantic

from ...config import DEFAULT_LIVE_URL_TEMPLATE
from ...models import Bar, LiveKey
from .transport import TransportConfig, WebSocketTransport

logger = logging.getLogger(__name__)


class LiveChannel(Protocol):
    """Protocol for live update channels.

    ``stream`` yields bars in arrival order until the channel closes. A clean
    close simply ends iteration; failures raise ``TransportError``. Either
    way the consumer must call ``stream`` again to resubscribe.
    """

    def stream(self, key: LiveKey) -> AsyncIterator[Bar]: ...


def decode_bar_message(message: Any, key: LiveKey) -> Bar | None:
    """Decode one channel message into a Bar.

    Returns None for messages that are not bars, are malformed, or carry an
    interval other than the one ``key`` asks for.
    """
    if not isinstance(message, dict):
        return None
    payload = message
    for envelope in ("data", "candle", "bar"):
        inner = message.get(envelope)
        if isinstance(inner, dict):
            payload = inner
            break

    if key.interval is not None:
        tagged = payload.get("interval", payload.get("timeframe", message.get("interval")))
        if tagged is not None and str(tagged) != key.interval.value:
            return None

    try:
        return Bar.model_validate(payload)
    except pydantic.ValidationError as e:
        logger.warning(f"Skipping malformed bar for {key.symbol}: {e.error_count()} error(s)")
        return None


class WebSocketLiveChannel:
    """Live channel over the pattern service's WebSocket endpoint.

    The URL template is filled with ``symbol``; when the key carries an
    interval it is filled into ``{interval}`` if the template has one,
    otherwise sent as an ``interval`` query parameter.
    """

    def __init__(
        self,
        url_template: str = DEFAULT_LIVE_URL_TEMPLATE,
        *,
        transport: WebSocketTransport | None = None,
        transport_config: TransportConfig | None = None,
    ) -> None:
        self._url_template = url_template
        self._transport = transport or WebSocketTransport(transport_config)

    def url_for(self, key: LiveKey) -> str:
        interval = key.interval.value if key.interval is not None else ""
        url = self._url_template.format(symbol=key.symbol, interval=interval)
        if key.interval is not None and "{interval}" not in self._url_template:
            sep = "&" if "?" in url else "?"
            url = f"{url}{sep}interval={interval}"
        return url

    async def stream(self, key: LiveKey) -> AsyncIterator[Bar]:
        url = self.url_for(key)
        skipped = 0
        async for message in self._transport.stream(url):
            bar = decode_bar_message(message, key)
            if bar is None:
                skipped += 1
                logger.debug(f"Ignored non-bar message on {url}")
                continue
            yield bar
        logger.debug(f"Live channel {url} ended ({skipped} message(s) ignored)")
