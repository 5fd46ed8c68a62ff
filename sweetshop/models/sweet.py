"""Sweet ORM — persists catalog entries and their on-hand quantity.

Invariants:
    - id is UUID primary key, assigned on insert, never updated
    - quantity >= 0 and price >= 0 (CHECK constraints back the core's guard)
    - price is Numeric(10, 2): fixed-point, never float
    - version is bumped by the ORM on every UPDATE (optimistic concurrency)

Design Decisions:
    - version_id_col over manual version arithmetic: a stale UPDATE matches zero
      rows and SQLAlchemy raises StaleDataError, which the service retries
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint, DateTime, Integer, Numeric, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from sweetshop.db.base import Base


class Sweet(Base):
    """Catalog entry — one sweet and the units available."""
    __tablename__ = "sweets"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_sweets_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_sweets_price_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __mapper_args__ = {"version_id_col": version}
