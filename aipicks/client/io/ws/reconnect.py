"""Reconnect policy applied when a live channel drops."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class ReconnectPolicy:
    """Bounded exponential backoff with jitter and a capped attempt count.

    ``max_attempts=0`` disables reconnecting: a dropped channel leaves the
    feed closed with an error until it is explicitly re-opened.
    """

    max_attempts: int = 0
    base_delay: float = 1.0
    max_delay: float = 30.0
    multiplier: float = 2.0
    jitter: float = 0.2

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be >= 0")
        if self.base_delay < 0 or self.max_delay < self.base_delay:
            raise ValueError("require 0 <= base_delay <= max_delay")
        if not 0 <= self.jitter <= 1:
            raise ValueError("jitter must be within [0, 1]")

    @classmethod
    def disabled(cls) -> ReconnectPolicy:
        return cls(max_attempts=0)

    @property
    def enabled(self) -> bool:
        return self.max_attempts > 0

    def next_delay(self, attempt: int) -> float | None:
        """Delay before reconnect ``attempt`` (0-based), or None once exhausted."""
        if attempt >= self.max_attempts:
            return None
        delay = min(self.base_delay * (self.multiplier**attempt), self.max_delay)
        if self.jitter:
            delay += delay * random.uniform(0, self.jitter)
        return delay
