"""Bar (OHLCV) data model."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Bar(BaseModel):
    """One OHLCV sample for a fixed interval.

    Prices must be finite; open/close are expected inside [low, high] but the
    upstream feed does not guarantee it, so it is not enforced here.
    """

    timestamp: datetime
    open: Decimal = Field(..., allow_inf_nan=False)
    high: Decimal = Field(..., allow_inf_nan=False)
    low: Decimal = Field(..., allow_inf_nan=False)
    close: Decimal = Field(..., allow_inf_nan=False)
    volume: Decimal = Field(..., ge=0, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def body(self) -> Decimal:
        """Absolute open/close distance."""
        return abs(self.close - self.open)

    @property
    def range(self) -> Decimal:
        return self.high - self.low

    def to_wire(self) -> dict[str, Any]:
        """Serialize the way the pattern service expects candles."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "open": float(self.open),
            "high": float(self.high),
            "low": float(self.low),
            "close": float(self.close),
            "volume": float(self.volume),
        }
