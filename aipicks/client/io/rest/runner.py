"""REST request runner using endpoint specs and response adapters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pydantic

from ...core.exceptions import DecodeError
from .http_client import HTTPClient


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # "GET" | "POST"
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_body: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None


class ResponseAdapter:
    def parse(self, response: Any, params: dict[str, Any]) -> Any:
        return response


class RestRunner:
    def __init__(self, client: HTTPClient) -> None:
        self._c = client

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        path = spec.build_path(params)
        query = spec.build_query(params) if spec.build_query else None
        body = spec.build_body(params) if spec.build_body else None
        headers = spec.build_headers(params) if spec.build_headers else None

        if spec.method.upper() == "GET":
            data = await self._c.get(path, params=query, headers=headers)
        else:
            data = await self._c.post(path, json=body, headers=headers)

        # Schema mismatches surface as decode errors like malformed JSON does
        try:
            return adapter.parse(data, params)
        except (pydantic.ValidationError, KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"{spec.id}: unexpected response shape: {e}") from e
