"""WebSocket runtime: transport, live bar channel and reconnect policy."""

from .channel import LiveChannel, WebSocketLiveChannel, decode_bar_message
from .reconnect import ReconnectPolicy
from .transport import TransportConfig, WebSocketTransport

__all__ = [
    "TransportConfig",
    "WebSocketTransport",
    "LiveChannel",
    "WebSocketLiveChannel",
    "decode_bar_message",
    "ReconnectPolicy",
]
