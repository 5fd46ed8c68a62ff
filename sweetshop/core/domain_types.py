"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SweetId, UserId wrap UUIDs — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

SweetId = NewType("SweetId", UUID)
UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Access roles carried in the user record and the token."""
    USER = "USER"
    ADMIN = "ADMIN"


class AdjustmentKind(str, Enum):
    """Direction of a quantity adjustment. Only PURCHASE is guarded."""
    PURCHASE = "purchase"
    RESTOCK = "restock"
