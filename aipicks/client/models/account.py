"""Account, subscription limits and usage models."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import SubscriptionTier

UNLIMITED = -1


class SubscriptionLimits(BaseModel):
    """Per-tier allowances; ``UNLIMITED`` (-1) lifts a cap."""

    api_calls_per_day: int
    patterns_per_day: int
    alerts: int
    realtime_data: bool

    model_config = ConfigDict(frozen=True)

    def is_unlimited(self, kind: str) -> bool:
        """Check one of ``api_calls``, ``patterns`` or ``alerts``."""
        value = {
            "api_calls": self.api_calls_per_day,
            "patterns": self.patterns_per_day,
            "alerts": self.alerts,
        }.get(kind)
        return value == UNLIMITED

    @classmethod
    def for_tier(cls, tier: SubscriptionTier) -> SubscriptionLimits:
        return TIER_LIMITS[tier]


TIER_LIMITS: dict[SubscriptionTier, SubscriptionLimits] = {
    SubscriptionTier.FREE: SubscriptionLimits(
        api_calls_per_day=100, patterns_per_day=10, alerts=3, realtime_data=False
    ),
    SubscriptionTier.PRO: SubscriptionLimits(
        api_calls_per_day=1000, patterns_per_day=100, alerts=20, realtime_data=True
    ),
    SubscriptionTier.PREMIUM: SubscriptionLimits(
        api_calls_per_day=UNLIMITED,
        patterns_per_day=UNLIMITED,
        alerts=UNLIMITED,
        realtime_data=True,
    ),
}


class UsageStats(BaseModel):
    """Daily usage counters. Mutable: updated as requests complete."""

    api_calls_today: int = 0
    patterns_detected_today: int = 0
    alerts_count: int = 0
    last_reset_date: date = Field(default_factory=date.today)

    def reset_if_needed(self, today: date | None = None) -> None:
        today = today or date.today()
        if self.last_reset_date != today:
            self.api_calls_today = 0
            self.patterns_detected_today = 0
            self.last_reset_date = today

    def increment_api_call(self, today: date | None = None) -> None:
        self.reset_if_needed(today)
        self.api_calls_today += 1

    def increment_pattern(self, count: int = 1, today: date | None = None) -> None:
        self.reset_if_needed(today)
        self.patterns_detected_today += count

    def within(self, limits: SubscriptionLimits) -> bool:
        """True while neither daily counter exceeds its cap."""
        calls_ok = (
            limits.api_calls_per_day == UNLIMITED
            or self.api_calls_today <= limits.api_calls_per_day
        )
        patterns_ok = (
            limits.patterns_per_day == UNLIMITED
            or self.patterns_detected_today <= limits.patterns_per_day
        )
        return calls_ok and patterns_ok


class User(BaseModel):
    """Signed-in user and their plan."""

    id: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    subscription_end: datetime | None = None
    usage: UsageStats = Field(default_factory=UsageStats)

    @property
    def limits(self) -> SubscriptionLimits:
        return SubscriptionLimits.for_tier(self.subscription_tier)
