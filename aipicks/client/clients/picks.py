"""Top picks client and list view state."""

from __future__ import annotations

import logging

from ..config import DEFAULT_PICKS_LIMIT
from ..core import ClientError, validate_limit
from ..endpoints import picks
from ..io.rest import HTTPClient, RestRunner
from ..models import StockPick

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"


class PicksClient:
    """Fetch ranked picks from the screening endpoint."""

    def __init__(self, http: HTTPClient) -> None:
        self._runner = RestRunner(http)
        self._adapter = picks.Adapter()

    async def top_picks(
        self, limit: int = DEFAULT_PICKS_LIMIT, category: str | None = None
    ) -> list[StockPick]:
        params = {"limit": validate_limit(limit), "category": category}
        return await self._runner.run(spec=picks.SPEC, adapter=self._adapter, params=params)


class PicksBoard:
    """Flat-refresh view state over the picks listing.

    Every ``load`` replaces the list wholesale; there are no incremental
    updates. A failed load keeps the previous picks and records the
    user-facing message in ``error``.
    """

    def __init__(self, client: PicksClient, *, limit: int = DEFAULT_PICKS_LIMIT) -> None:
        self._client = client
        self._limit = limit
        self.picks: list[StockPick] = []
        self.filtered: list[StockPick] = []
        self.category: str | None = None
        self.is_loading = False
        self.error: str | None = None

    async def load(self) -> list[StockPick]:
        self.is_loading = True
        self.error = None
        try:
            fetched = await self._client.top_picks(limit=self._limit)
        except ClientError as e:
            logger.warning(f"Loading picks failed: {e}")
            self.error = e.user_message
            return self.filtered
        finally:
            self.is_loading = False
        self.picks = fetched
        self._apply_filter()
        return self.filtered

    async def refresh(self) -> list[StockPick]:
        return await self.load()

    def filter_by_category(self, category: str | None) -> list[StockPick]:
        """Narrow to one category (case-insensitive); None or "All" shows everything."""
        if category is None or category.strip().lower() == ALL_CATEGORIES.lower():
            self.category = None
        else:
            self.category = category
        self._apply_filter()
        return self.filtered

    def categories(self) -> list[str]:
        """Distinct categories in the current list, in first-seen order.

        Matching ignores case; the first spelling seen is the one returned.
        """
        seen: dict[str, str] = {}
        for pick in self.picks:
            if pick.category:
                seen.setdefault(pick.category.lower(), pick.category)
        return list(seen.values())

    def _apply_filter(self) -> None:
        if self.category is None:
            self.filtered = list(self.picks)
        else:
            self.filtered = [p for p in self.picks if p.in_category(self.category)]
