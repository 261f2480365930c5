"""Custom exception hierarchy.

Every failure the client surfaces falls into one of four kinds: a request
the client refused to send, a transport failure, a non-success status from
the server, or a payload that could not be decoded.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Error taxonomy exposed through feed and view state."""

    INVALID_REQUEST = "invalid_request"
    TRANSPORT = "transport"
    SERVER = "server"
    DECODE = "decode"

    def __str__(self) -> str:
        return self.value


class ClientError(Exception):
    """Base exception for all library errors."""

    kind: ErrorKind = ErrorKind.TRANSPORT
    user_message: str = "Something went wrong"


class InvalidRequestError(ClientError):
    """Bad symbol, interval or other argument; nothing was sent."""

    kind = ErrorKind.INVALID_REQUEST
    user_message = "Invalid request"


class TransportError(ClientError):
    """Network, connect or channel failure."""

    kind = ErrorKind.TRANSPORT
    user_message = "Network connection failed"


class ServerError(ClientError):
    """Server answered with a non-success status."""

    kind = ErrorKind.SERVER
    user_message = "Server error occurred"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(ServerError):
    """Server rate limit exceeded."""

    user_message = "Too many requests, try again later"

    def __init__(self, message: str, retry_after: float = 60) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class DecodeError(ClientError):
    """Payload was not valid JSON or did not match the expected schema."""

    kind = ErrorKind.DECODE
    user_message = "Failed to decode response"
