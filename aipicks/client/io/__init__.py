"""I/O layer (REST runtime and live WebSocket channel)."""

from .rest import HTTPClient, ResponseAdapter, RestEndpointSpec, RestRunner
from .ws import (
    LiveChannel,
    ReconnectPolicy,
    TransportConfig,
    WebSocketLiveChannel,
    WebSocketTransport,
)

__all__ = [
    "HTTPClient",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
    "TransportConfig",
    "WebSocketTransport",
    "LiveChannel",
    "WebSocketLiveChannel",
    "ReconnectPolicy",
]
