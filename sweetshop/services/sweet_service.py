"""Sweet Service — catalog orchestration and the transactional shell around inventory adjustment.

Invariants:
    - Every id-scoped write runs load (FOR UPDATE) → check → mutate → commit in one transaction
    - Failures (NotFound, InsufficientStock, InvalidInput) roll back: zero writes
    - Only StaleDataError (version mismatch) is retried, up to max_attempts
    - Entries never cached across calls: each attempt re-reads the row

Design Decisions:
    - Impureim sandwich: IO here, arithmetic in core/inventory_adjustment.py
    - Row lock + version column: PostgreSQL serializes on the lock, engines
      without FOR UPDATE (SQLite) fall back to the version check and retry
"""

import logging
from typing import Awaitable, Callable

from sqlalchemy.orm.exc import StaleDataError

from sweetshop.core.domain_types import AdjustmentKind, SweetId
from sweetshop.core.errors import (
    ConcurrencyError, ErrorContext, ResourceNotFoundError, SweetShopError,
)
from sweetshop.core.inventory_adjustment import (
    compute_adjusted_quantity, validate_amount,
)
from sweetshop.core.repository_protocols import SweetLike, SweetRepository
from sweetshop.core.search_criteria import SearchCriteria

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class SweetService:
    """Catalog operations over a request-scoped repository."""

    def __init__(
        self, repo: SweetRepository, max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.repo = repo
        self.max_attempts = max(1, max_attempts)

    # ─── Reads ───────────────────────────────────────────────────

    async def get(self, sweet_id: SweetId) -> SweetLike:
        sweet = await self.repo.get(sweet_id)
        if sweet is None:
            raise ResourceNotFoundError("Sweet", str(sweet_id))
        return sweet

    async def list_all(self) -> list[SweetLike]:
        return await self.repo.list_all()

    async def search(self, criteria: SearchCriteria) -> list[SweetLike]:
        if criteria.is_empty:
            return await self.repo.list_all()
        return await self.repo.search(criteria)

    # ─── Writes ──────────────────────────────────────────────────

    async def create(self, fields: dict) -> SweetLike:
        sweet = await self.repo.add(fields)
        await self.repo.commit()
        logger.info(
            f"Sweet created: {sweet.name}", extra={"sweet_id": str(sweet.id)},
        )
        return sweet

    async def update(self, sweet_id: SweetId, fields: dict) -> SweetLike:
        """Full replace of name, category, price, quantity, description."""
        async def replace(sweet: SweetLike) -> None:
            for key in ("name", "category", "price", "quantity", "description"):
                setattr(sweet, key, fields.get(key))

        sweet = await self._locked_write(sweet_id, replace, "update")
        logger.info("Sweet updated", extra={"sweet_id": str(sweet_id)})
        return sweet

    async def delete(self, sweet_id: SweetId) -> None:
        async def remove(sweet: SweetLike) -> None:
            await self.repo.delete(sweet)

        await self._locked_write(sweet_id, remove, "delete")
        logger.info("Sweet deleted", extra={"sweet_id": str(sweet_id)})

    # ─── Inventory adjustment ────────────────────────────────────

    async def adjust(
        self, sweet_id: SweetId, kind: AdjustmentKind, amount: int,
    ) -> SweetLike:
        """Apply a guarded quantity change as one atomic unit."""
        # Reject bad input before touching the store
        validate_amount(amount)

        async def apply(sweet: SweetLike) -> None:
            sweet.quantity = compute_adjusted_quantity(
                sweet.quantity, kind, amount,
            )

        sweet = await self._locked_write(sweet_id, apply, kind.value)
        logger.info(
            f"Sweet {kind.value} applied",
            extra={
                "sweet_id": str(sweet_id), "adjustment": kind.value,
                "amount": amount, "quantity": sweet.quantity,
            },
        )
        return sweet

    async def purchase(self, sweet_id: SweetId, amount: int) -> SweetLike:
        return await self.adjust(sweet_id, AdjustmentKind.PURCHASE, amount)

    async def restock(self, sweet_id: SweetId, amount: int) -> SweetLike:
        return await self.adjust(sweet_id, AdjustmentKind.RESTOCK, amount)

    # ─── Transaction shell ───────────────────────────────────────

    async def _locked_write(
        self,
        sweet_id: SweetId,
        mutate: Callable[[SweetLike], Awaitable[None]],
        action: str,
    ) -> SweetLike:
        for attempt in range(1, self.max_attempts + 1):
            sweet = await self.repo.get_for_update(sweet_id)
            if sweet is None:
                await self.repo.rollback()
                raise ResourceNotFoundError("Sweet", str(sweet_id))
            try:
                await mutate(sweet)
            except SweetShopError as e:
                await self.repo.rollback()
                e.context.sweet_id = str(sweet_id)
                raise
            try:
                await self.repo.commit()
            except StaleDataError:
                await self.repo.rollback()
                logger.warning(
                    f"Write conflict on sweet {action}, retrying",
                    extra={"sweet_id": str(sweet_id), "attempt": attempt},
                )
                continue
            return sweet
        raise ConcurrencyError(
            f"Could not {action} sweet after {self.max_attempts} attempts",
            ErrorContext(sweet_id=str(sweet_id)),
        )
