"""REST runtime abstractions."""

from .http_client import HTTPClient, ResponseHook
from .runner import ResponseAdapter, RestEndpointSpec, RestRunner

__all__ = [
    "HTTPClient",
    "ResponseHook",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
]
