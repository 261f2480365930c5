"""Finding (detected chart pattern) data model."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.enums import Direction


class Finding(BaseModel):
    """A pattern annotation tied to the series snapshot that produced it.

    ``end_index`` is the reference index into the series at detection time
    and ``price_at_detection`` the price at that index.
    """

    pattern_type: str = Field(..., min_length=1)
    direction: Direction = Direction.NEUTRAL
    confidence: float = Field(..., ge=0.0, le=1.0)
    strength: int = Field(1, ge=1)
    start_index: int = Field(..., ge=0)
    end_index: int = Field(..., ge=0)
    price_at_detection: Decimal = Field(..., allow_inf_nan=False)
    context: dict[str, float] = Field(default_factory=dict)
    timestamp: datetime | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("direction", mode="before")
    @classmethod
    def normalize_direction(cls, v: Any) -> Any:
        """Unknown or missing directions are treated as neutral."""
        if isinstance(v, Direction):
            return v
        if isinstance(v, str):
            try:
                return Direction(v.strip().lower())
            except ValueError:
                return Direction.NEUTRAL
        return Direction.NEUTRAL

    @field_validator("end_index")
    @classmethod
    def validate_end_index(cls, v: int, info) -> int:
        """Validate end_index >= start_index."""
        if "start_index" in info.data and v < info.data["start_index"]:
            raise ValueError("end_index must be >= start_index")
        return v

    @property
    def index(self) -> int:
        """Reference index into the series."""
        return self.end_index

    def fits(self, length: int) -> bool:
        """True if every index falls inside a series of ``length`` bars."""
        return self.end_index < length
