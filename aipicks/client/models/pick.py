"""Ranked stock pick models."""

from pydantic import BaseModel, ConfigDict, Field


class StockPick(BaseModel):
    """One ranked pick from the screening endpoint."""

    symbol: str = Field(..., min_length=1)
    company_name: str | None = None
    rank: int = Field(..., ge=1)
    ai_score: float
    confidence: float
    risk_score: float
    predicted_return: float
    category: str = ""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    def in_category(self, category: str) -> bool:
        """Case-insensitive category match."""
        return self.category.lower() == category.strip().lower()


class PicksResponse(BaseModel):
    """Envelope returned by the screening endpoint."""

    top_picks: list[StockPick] | None = None
    generated_at: str | None = None

    model_config = ConfigDict(frozen=True)
