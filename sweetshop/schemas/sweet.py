"""Sweet Schemas — catalog entry payloads with field-level validation.

Invariants:
    - name/category stripped and non-empty
    - price >= 0 with at most 2 decimal places, parsed as Decimal (never float)
    - 0 <= quantity <= MAX_QUANTITY at creation/update
    - AdjustmentRequest.quantity is NOT range-checked here: the core rejects
      non-positive amounts so the rule lives in one place
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sweetshop.core.inventory_adjustment import MAX_QUANTITY


class SweetCreate(BaseModel):
    """Create or full-replace payload for a catalog entry."""
    name: str = Field(min_length=1, max_length=100)
    category: str = Field(min_length=1, max_length=50)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    quantity: int = Field(ge=0, le=MAX_QUANTITY)
    description: str | None = Field(None, max_length=2000)

    @field_validator("name", "category")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class SweetUpdate(SweetCreate):
    """Full replace — every mutable field required, same rules as create."""


class AdjustmentRequest(BaseModel):
    """Body of purchase/restock calls."""
    quantity: int


class SweetResponse(BaseModel):
    """Public-facing catalog entry."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    category: str
    price: Decimal
    quantity: int
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
