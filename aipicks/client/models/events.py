"""Feed state events published to subscribers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..core.enums import FeedState, Interval, LiveKeyMode
from ..core.exceptions import ClientError, ErrorKind
from .bar import Bar
from .finding import Finding


@dataclass(frozen=True)
class SubscriptionKey:
    """(symbol, interval) pair identifying an active feed."""

    symbol: str
    interval: Interval

    def live_key(self, mode: LiveKeyMode) -> LiveKey:
        """Project onto the key the live channel is addressed by."""
        if mode == LiveKeyMode.SYMBOL_INTERVAL:
            return LiveKey(symbol=self.symbol, interval=self.interval)
        return LiveKey(symbol=self.symbol)

    def __str__(self) -> str:
        return f"{self.symbol}@{self.interval.value}"


@dataclass(frozen=True)
class LiveKey:
    """Address of a live update channel; interval is None when keyed by symbol only."""

    symbol: str
    interval: Interval | None = None


@dataclass(frozen=True)
class FeedError:
    """Last error recorded by a feed."""

    kind: ErrorKind
    message: str
    timestamp: datetime
    user_message: str = ""

    @classmethod
    def from_exception(cls, exc: ClientError) -> FeedError:
        return cls(
            kind=exc.kind,
            message=str(exc) or exc.user_message,
            timestamp=datetime.now(timezone.utc),
            user_message=exc.user_message,
        )


@dataclass(frozen=True)
class FeedSnapshot:
    """Immutable view of a feed after one state transition.

    ``series_version`` is the generation of ``bars``; ``findings_version`` is
    the series generation the findings were detected on. They differ while a
    detection over the newest bars is still in flight.
    """

    key: SubscriptionKey | None
    state: FeedState
    bars: tuple[Bar, ...] = ()
    findings: tuple[Finding, ...] = ()
    error: FeedError | None = None
    series_version: int = 0
    findings_version: int = 0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def findings_current(self) -> bool:
        """True when findings were computed over exactly these bars."""
        return self.series_version == self.findings_version

    @property
    def last_bar(self) -> Bar | None:
        return self.bars[-1] if self.bars else None
