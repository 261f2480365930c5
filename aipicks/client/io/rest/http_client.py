"""Async HTTP client wrapper with error mapping, throttling and response hooks."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp

from ...core.exceptions import DecodeError, RateLimitError, ServerError, TransportError

logger = logging.getLogger(__name__)

# A hook sees every response before its status is checked. Returning a number
# of seconds throttles the next request by that much.
ResponseHook = Callable[[Any], Awaitable[float | None]] | Callable[[Any], float | None]

_RATE_LIMIT_FALLBACK_SECONDS = 60.0


class HTTPClient:
    """Async HTTP client wrapper.

    Maps every failure onto the client's error taxonomy: connection problems
    and timeouts become ``TransportError``, non-2xx statuses ``ServerError``
    (``RateLimitError`` for 429), and unparsable bodies ``DecodeError``.
    Nothing is retried here.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        *,
        auth_token: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._headers: dict[str, str] = {"Accept": "application/json"}
        if auth_token:
            self._headers["Authorization"] = f"Bearer {auth_token}"
        if headers:
            self._headers.update(headers)
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []
        self._throttle_until: float | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self._headers)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        self._response_hooks.append(hook)

    def set_throttle(self, seconds: float) -> None:
        """Hold the next request back for ``seconds``; never shortens an existing window."""
        if seconds <= 0:
            return
        until = time.time() + seconds
        if self._throttle_until is None or until > self._throttle_until:
            self._throttle_until = until

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request returning decoded JSON."""
        return await self._request("get", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST a JSON body, returning decoded JSON."""
        return await self._request("post", url, json=json, headers=headers)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ----------------------
    # Internals
    # ----------------------
    def _url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith(("http://", "https://")):
            return f"{self.base_url}{url}"
        return url

    async def _wait_throttle(self) -> None:
        if self._throttle_until is None:
            return
        delay = self._throttle_until - time.time()
        self._throttle_until = None
        if delay > 0:
            await asyncio.sleep(delay)

    async def _run_hooks(self, response: Any) -> None:
        for hook in self._response_hooks:
            try:
                result = hook(response)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as e:  # noqa: BLE001
                logger.warning(f"Response hook {getattr(hook, '__name__', hook)!r} failed: {e}")
                continue
            if isinstance(result, int | float) and not isinstance(result, bool):
                self.set_throttle(float(result))

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        await self._wait_throttle()
        full_url = self._url(url)
        logger.debug("HTTP request", extra={"method": method.upper(), "url": full_url})
        try:
            async with getattr(self.session, method)(full_url, **kwargs) as response:
                await self._run_hooks(response)
                status = response.status
                if status == 429:
                    raise RateLimitError(
                        f"{method.upper()} {full_url} rate limited",
                        retry_after=_retry_after(response),
                    )
                if not 200 <= status < 300:
                    raise ServerError(
                        f"{method.upper()} {full_url} returned HTTP {status}",
                        status_code=status,
                    )
                try:
                    return await response.json()
                except (aiohttp.ContentTypeError, json.JSONDecodeError, ValueError) as e:
                    raise DecodeError(f"{method.upper()} {full_url}: invalid JSON body") from e
        except asyncio.TimeoutError as e:
            raise TransportError(f"{method.upper()} {full_url} timed out") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"{method.upper()} {full_url} failed: {e}") from e


def _retry_after(response: Any) -> float:
    raw = getattr(response, "headers", {}).get("Retry-After")
    try:
        return float(raw) if raw is not None else _RATE_LIMIT_FALLBACK_SECONDS
    except (TypeError, ValueError):
        return _RATE_LIMIT_FALLBACK_SECONDS
