"""Bounded bar series owned by a single feed."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator

from .bar import Bar


class BarSeries:
    """Capacity-bounded, arrival-ordered sequence of bars.

    Appending past capacity evicts the oldest bar by arrival order, not by
    timestamp. ``version`` increases on every mutation so derived state can
    be matched to the exact series generation it was computed from.
    """

    def __init__(self, capacity: int = 100) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._capacity = capacity
        self._bars: deque[Bar] = deque(maxlen=capacity)
        self._version = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def version(self) -> int:
        return self._version

    @property
    def last(self) -> Bar | None:
        return self._bars[-1] if self._bars else None

    def append(self, bar: Bar) -> Bar | None:
        """Append a bar and return the evicted one, if any."""
        evicted = self._bars[0] if len(self._bars) == self._capacity else None
        self._bars.append(bar)
        self._version += 1
        return evicted

    def replace(self, bars: Iterable[Bar]) -> None:
        """Replace the contents in one mutation, keeping the newest ``capacity`` bars."""
        self._bars = deque(bars, maxlen=self._capacity)
        self._version += 1

    def clear(self) -> None:
        self._bars.clear()
        self._version += 1

    def snapshot(self) -> tuple[Bar, ...]:
        """Immutable copy of the current contents."""
        return tuple(self._bars)

    def __len__(self) -> int:
        return len(self._bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(self._bars)

    def __getitem__(self, index: int) -> Bar:
        return self._bars[index]

    def __repr__(self) -> str:
        return f"BarSeries(len={len(self._bars)}, capacity={self._capacity}, version={self._version})"
