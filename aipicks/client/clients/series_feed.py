"""StreamingSeriesFeed: one live bar series with pattern findings kept in sync.

A feed owns a single (symbol, interval) subscription:

- open/close/change_interval lifecycle; changing the key always tears the
  feed down and rebuilds it from history
- a capacity-bounded series fed by the live channel (oldest bar evicted)
- findings recomputed wholesale after every series mutation; a detection
  still in flight for an older series generation is cancelled
- immutable FeedSnapshot objects published to subscribers, in order, after
  every state change

Collaborators (history fetcher, pattern detector, live channel) are injected
so each feed is independent and testable with fakes.

Notes:
- Fetch and detection failures are recorded in the feed's error state and
  never raised out of the background tasks; nothing is retried except the
  live channel, and only when a ReconnectPolicy allows it.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import uuid
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

import pydantic

from ..config import DEFAULT_SERIES_CAPACITY
from ..core import (
    ClientError,
    DecodeError,
    FeedState,
    Interval,
    InvalidRequestError,
    LiveKeyMode,
    TransportError,
    normalize_symbol,
    parse_interval,
)
from ..io.ws import LiveChannel, ReconnectPolicy
from ..models import Bar, BarSeries, FeedError, FeedSnapshot, Finding, SubscriptionKey
from ..utils import build_context
from .detector import PatternDetector
from .history import HistoryFetcher

logger = logging.getLogger(__name__)

Callback = Callable[[FeedSnapshot], Awaitable[None]] | Callable[[FeedSnapshot], None]
ContextBuilder = Callable[[Sequence[Bar]], Mapping[str, float]]
FindingsHook = Callable[[int], None]

# Raised when a collaborator hands back bars or findings of the wrong shape
_DECODE_FAILURES = (pydantic.ValidationError, AttributeError, TypeError, KeyError, ValueError)


class StreamingSeriesFeed:
    """Bounded streaming series with periodic pattern re-detection."""

    def __init__(
        self,
        history: HistoryFetcher,
        detector: PatternDetector,
        channel: LiveChannel,
        *,
        capacity: int = DEFAULT_SERIES_CAPACITY,
        key_mode: LiveKeyMode = LiveKeyMode.SYMBOL,
        reconnect: ReconnectPolicy | None = None,
        context_builder: ContextBuilder = build_context,
        on_findings: FindingsHook | None = None,
    ) -> None:
        self._history = history
        self._detector = detector
        self._channel = channel
        self._key_mode = key_mode
        self._reconnect = reconnect or ReconnectPolicy.disabled()
        self._context_builder = context_builder
        self._on_findings = on_findings

        # Series state
        self._series = BarSeries(capacity)
        self._findings: tuple[Finding, ...] = ()
        self._findings_version = 0
        self._key: SubscriptionKey | None = None
        self._state = FeedState.CLOSED
        self._error: FeedError | None = None

        # Background work
        self._open_task: asyncio.Task | None = None
        self._live_task: asyncio.Task | None = None
        self._detect_task: asyncio.Task | None = None
        # Bumped by every open/close so a superseded open() can bail out
        self._generation = 0

        self._subs: dict[str, Callback] = {}

        # Serializes teardown/rebuild between open, close and change_interval
        self._lock = asyncio.Lock()

    # ----------------------
    # Lifecycle
    # ----------------------
    async def open(self, symbol: str, interval: Interval | str) -> None:
        """Subscribe to ``symbol``/``interval``, replacing any current subscription.

        Raises InvalidRequestError for an empty symbol or unsupported interval,
        leaving the series and findings untouched. Fetch and detection failures
        do not raise: the feed moves to CLOSED_WITH_ERROR with an empty series.
        """
        try:
            key = SubscriptionKey(normalize_symbol(symbol), parse_interval(interval))
        except InvalidRequestError as e:
            self._error = FeedError.from_exception(e)
            await self._publish()
            raise

        async with self._lock:
            await self._teardown()
            self._generation += 1
            generation = self._generation
            self._key = key
            self._series.clear()
            self._findings = ()
            self._findings_version = self._series.version
            self._error = None
            self._state = FeedState.OPENING
            logger.debug(f"Opening feed {key}")

        await self._publish()
        if generation != self._generation:
            # Superseded by close() or another open() while publishing
            return
        task = asyncio.create_task(self._open(key))
        self._open_task = task

        try:
            await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            # Superseded by close() or another open()
            logger.debug(f"Opening {key} was cancelled")

    async def close(self) -> None:
        """Stop the live subscription. Idempotent; series and findings are kept."""
        async with self._lock:
            await self._teardown()
            self._generation += 1
            changed = self._state.is_active
            if changed:
                self._state = FeedState.CLOSED
                logger.debug(f"Closed feed {self._key}")
        if changed:
            await self._publish()

    async def change_interval(self, interval: Interval | str) -> None:
        """Rebuild the feed on a new interval for the current symbol."""
        if self._key is None:
            raise InvalidRequestError("Feed has no symbol; call open() first")
        new_interval = parse_interval(interval)
        await self.close()
        await self.open(self._key.symbol, new_interval)

    async def refresh(self) -> None:
        """Re-open the current subscription (manual retry after an error)."""
        if self._key is None:
            raise InvalidRequestError("Feed has no symbol; call open() first")
        await self.open(self._key.symbol, self._key.interval)

    async def settle(self) -> None:
        """Wait until no detection is in flight."""
        while self._detect_task is not None and not self._detect_task.done():
            task = self._detect_task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if task is self._detect_task:
                    raise

    async def __aenter__(self) -> StreamingSeriesFeed:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ----------------------
    # Subscriptions
    # ----------------------
    def subscribe(self, callback: Callback) -> str:
        """Receive a FeedSnapshot after every state change.

        Returns a subscription_id to later unsubscribe.
        """
        sub_id = uuid.uuid4().hex
        self._subs[sub_id] = callback
        return sub_id

    def unsubscribe(self, subscription_id: str) -> None:
        self._subs.pop(subscription_id, None)

    # Sugar alias for subscribe
    def on_snapshot(self, callback: Callback) -> str:
        return self.subscribe(callback)

    # ----------------------
    # State access
    # ----------------------
    @property
    def key(self) -> SubscriptionKey | None:
        return self._key

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def error(self) -> FeedError | None:
        return self._error

    @property
    def bars(self) -> tuple[Bar, ...]:
        return self._series.snapshot()

    @property
    def findings(self) -> tuple[Finding, ...]:
        return self._findings

    @property
    def capacity(self) -> int:
        return self._series.capacity

    def snapshot(self) -> FeedSnapshot:
        return FeedSnapshot(
            key=self._key,
            state=self._state,
            bars=self._series.snapshot(),
            findings=self._findings,
            error=self._error,
            series_version=self._series.version,
            findings_version=self._findings_version,
        )

    # ----------------------
    # Internals
    # ----------------------
    async def _open(self, key: SubscriptionKey) -> None:
        capacity = self._series.capacity
        try:
            fetched = await self._history.fetch(key.symbol, key.interval, capacity)
            bars = sorted(fetched, key=lambda b: b.timestamp)[-capacity:]
            findings = await self._detect(key, bars) if bars else []
        except Exception as e:
            self._error = FeedError.from_exception(_client_error(e, f"Opening {key} failed"))
            self._state = FeedState.CLOSED_WITH_ERROR
            await self._publish()
            return

        # Series and findings are committed together so a failed open leaves both empty
        self._series.replace(bars)
        self._commit_findings(findings, self._series.version)
        self._state = FeedState.LIVE
        self._live_task = asyncio.create_task(self._live_loop(key))
        logger.debug(f"Feed {key} live with {len(bars)} bars, {len(self._findings)} findings")
        await self._publish()

    async def _live_loop(self, key: SubscriptionKey) -> None:
        live_key = key.live_key(self._key_mode)
        attempt = 0
        while True:
            error: ClientError
            try:
                async for bar in self._channel.stream(live_key):
                    attempt = 0
                    if self._state == FeedState.RECONNECTING:
                        self._state = FeedState.LIVE
                    await self.on_bar_received(bar)
                error = TransportError(f"Live channel for {key} closed")
            except ClientError as e:
                error = e
            except Exception as e:
                logger.error(f"Live channel for {key} failed", exc_info=True)
                error = TransportError(f"Live channel for {key} failed: {e}")

            self._error = FeedError.from_exception(error)
            delay = self._reconnect.next_delay(attempt)
            if delay is None:
                logger.warning(f"{error}; feed stays closed until re-opened")
                self._state = FeedState.CLOSED_WITH_ERROR
                await self._publish()
                return
            attempt += 1
            logger.warning(
                f"{error}; reconnecting in {delay:.2f}s "
                f"(attempt {attempt}/{self._reconnect.max_attempts})"
            )
            self._state = FeedState.RECONNECTING
            await self._publish()
            await asyncio.sleep(delay)

    async def on_bar_received(self, bar: Bar) -> None:
        """Ingest one live bar and re-run detection over the new window."""
        key = self._key
        if key is None or self._state != FeedState.LIVE:
            logger.debug(f"Ignoring bar while feed is {self._state}")
            return
        evicted = self._series.append(bar)
        if evicted is not None:
            logger.debug(f"{key}: evicted bar at {evicted.timestamp.isoformat()}")
        self._schedule_detection(key, self._series.snapshot(), self._series.version)
        await self._publish()

    def _schedule_detection(
        self, key: SubscriptionKey, bars: tuple[Bar, ...], version: int
    ) -> None:
        if self._detect_task is not None and not self._detect_task.done():
            logger.debug(f"{key}: superseding detection for an older series generation")
            self._detect_task.cancel()
        self._detect_task = asyncio.create_task(self._run_detection(key, bars, version))

    async def _run_detection(
        self, key: SubscriptionKey, bars: tuple[Bar, ...], version: int
    ) -> None:
        try:
            findings = await self._detect(key, bars)
        except Exception as e:
            # Errors from superseded generations are not worth reporting
            if version == self._series.version:
                error = _client_error(e, f"Detection for {key} failed")
                self._error = FeedError.from_exception(error)
                await self._publish()
            return
        if self._commit_findings(findings, version):
            if self._state == FeedState.LIVE:
                self._error = None
            await self._publish()

    async def _detect(self, key: SubscriptionKey, bars: Sequence[Bar]) -> list[Finding]:
        context = dict(self._context_builder(bars))
        findings = await self._detector.detect(key.symbol, key.interval, bars, context)
        in_bounds = [f for f in findings if f.fits(len(bars))]
        if len(in_bounds) != len(findings):
            logger.warning(
                f"{key}: dropped {len(findings) - len(in_bounds)} finding(s) "
                f"outside a {len(bars)}-bar window"
            )
        return in_bounds

    def _commit_findings(self, findings: Sequence[Finding], version: int) -> bool:
        if version < self._findings_version:
            return False
        self._findings = tuple(findings)
        self._findings_version = version
        if self._on_findings is not None:
            self._on_findings(len(self._findings))
        return True

    async def _teardown(self) -> None:
        current = asyncio.current_task()
        tasks = [self._open_task, self._live_task, self._detect_task]
        self._open_task = self._live_task = self._detect_task = None
        for task in tasks:
            if task is None or task.done():
                continue
            task.cancel()
            if task is current:
                continue
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _publish(self) -> None:
        if not self._subs:
            return
        snap = self.snapshot()
        for callback in list(self._subs.values()):
            try:
                result: Any = callback(snap)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                # Log error but don't crash
                logger.error(f"Error in feed subscriber callback: {e}", exc_info=True)


def _client_error(exc: Exception, context: str) -> ClientError:
    """Log a collaborator failure and return it in the client error taxonomy.

    Malformed collaborator output is a DecodeError; anything else not
    already a ClientError is a transport failure.
    """
    if isinstance(exc, ClientError):
        logger.warning(f"{context}: {exc}")
        return exc
    logger.error(context, exc_info=exc)
    if isinstance(exc, _DECODE_FAILURES):
        return DecodeError(f"{context}: {exc}")
    return TransportError(f"{context}: {exc}")
