"""Inventory Adjustment — pure quantity arithmetic for purchase and restock.

Invariants:
    - Resulting quantity is never negative
    - amount must be a positive int (bool rejected); never silently negated
    - Resulting quantity never exceeds MAX_QUANTITY (the stored column is a 32-bit INTEGER)
    - Failure raises before any value is produced: callers cannot apply a partial result

Design Decisions:
    - One function parameterized by AdjustmentKind: purchase and restock share
      load → check → mutate → persist, differing only in direction and guard
    - Pure (no IO): the service shell owns locking, persistence and retries
"""

from sweetshop.core.domain_types import AdjustmentKind
from sweetshop.core.errors import InsufficientStockError, InvalidInputError

MAX_QUANTITY = 2**31 - 1


def validate_amount(amount: int) -> None:
    """Reject non-integer and non-positive adjustment amounts."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidInputError("Quantity must be an integer", "quantity")
    if amount <= 0:
        raise InvalidInputError("Quantity must be greater than zero", "quantity")


def compute_adjusted_quantity(
    current: int, kind: AdjustmentKind, amount: int,
) -> int:
    """Return the quantity after applying `amount` in direction `kind`.

    Raises InvalidInputError for a bad amount or a restock past
    MAX_QUANTITY, and InsufficientStockError when a purchase would take
    the quantity below zero.
    """
    validate_amount(amount)
    if kind is AdjustmentKind.PURCHASE:
        if amount > current:
            raise InsufficientStockError(available=current, requested=amount)
        return current - amount
    if amount > MAX_QUANTITY - current:
        raise InvalidInputError(
            f"Quantity cannot exceed {MAX_QUANTITY}", "quantity",
        )
    return current + amount
