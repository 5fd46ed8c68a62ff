"""Sweets Routes — catalog CRUD, search, purchase and restock.

Invariants:
    - Every endpoint requires an authenticated user
    - DELETE and restock additionally require ADMIN
    - /search registered before /{sweet_id} so it is not captured as an id
    - No try/except: SweetShopError propagates to the global handler
"""

import logging
from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from sweetshop.api.dependencies import (
    get_current_user, get_sweet_service, require_admin,
)
from sweetshop.core.domain_types import SweetId
from sweetshop.core.search_criteria import build_search_criteria
from sweetshop.schemas.common import ApiResponse
from sweetshop.schemas.sweet import (
    AdjustmentRequest, SweetCreate, SweetResponse, SweetUpdate,
)
from sweetshop.services.sweet_service import SweetService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/sweets", tags=["sweets"],
    dependencies=[Depends(get_current_user)],
)


def _one(message: str, sweet) -> ApiResponse[SweetResponse]:
    return ApiResponse[SweetResponse](
        message=message, data=SweetResponse.model_validate(sweet),
    )


def _many(message: str, sweets) -> ApiResponse[list[SweetResponse]]:
    return ApiResponse[list[SweetResponse]](
        message=message,
        data=[SweetResponse.model_validate(s) for s in sweets],
    )


@router.post(
    "", response_model=ApiResponse[SweetResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_sweet(
    body: SweetCreate, service: SweetService = Depends(get_sweet_service),
):
    """Add a new sweet to the catalog."""
    sweet = await service.create(body.model_dump())
    return _one("Sweet created successfully", sweet)


@router.get("", response_model=ApiResponse[list[SweetResponse]])
async def list_sweets(service: SweetService = Depends(get_sweet_service)):
    """List every sweet."""
    return _many("Sweets retrieved successfully", await service.list_all())


@router.get("/search", response_model=ApiResponse[list[SweetResponse]])
async def search_sweets(
    name: str | None = Query(None, max_length=100),
    category: str | None = Query(None, max_length=50),
    min_price: Decimal | None = Query(None),
    max_price: Decimal | None = Query(None),
    q: str | None = Query(None, max_length=100),
    service: SweetService = Depends(get_sweet_service),
):
    """Search by name, category, price range or free text (name OR category)."""
    criteria = build_search_criteria(
        name=name, category=category,
        min_price=min_price, max_price=max_price, query=q,
    )
    return _many("Search completed successfully", await service.search(criteria))


@router.get("/{sweet_id}", response_model=ApiResponse[SweetResponse])
async def get_sweet(
    sweet_id: UUID, service: SweetService = Depends(get_sweet_service),
):
    sweet = await service.get(SweetId(sweet_id))
    return _one("Sweet retrieved successfully", sweet)


@router.put("/{sweet_id}", response_model=ApiResponse[SweetResponse])
async def update_sweet(
    sweet_id: UUID,
    body: SweetUpdate,
    service: SweetService = Depends(get_sweet_service),
):
    """Replace every mutable field of a sweet."""
    sweet = await service.update(SweetId(sweet_id), body.model_dump())
    return _one("Sweet updated successfully", sweet)


@router.delete(
    "/{sweet_id}", response_model=ApiResponse[SweetResponse],
    dependencies=[Depends(require_admin)],
)
async def delete_sweet(
    sweet_id: UUID, service: SweetService = Depends(get_sweet_service),
):
    """Remove a sweet (admin only)."""
    await service.delete(SweetId(sweet_id))
    return ApiResponse[SweetResponse](message="Sweet deleted successfully")


@router.post("/{sweet_id}/purchase", response_model=ApiResponse[SweetResponse])
async def purchase_sweet(
    sweet_id: UUID,
    body: AdjustmentRequest,
    service: SweetService = Depends(get_sweet_service),
):
    """Buy `quantity` units; fails without change if stock is insufficient."""
    sweet = await service.purchase(SweetId(sweet_id), body.quantity)
    return _one("Purchase completed successfully", sweet)


@router.post(
    "/{sweet_id}/restock", response_model=ApiResponse[SweetResponse],
    dependencies=[Depends(require_admin)],
)
async def restock_sweet(
    sweet_id: UUID,
    body: AdjustmentRequest,
    service: SweetService = Depends(get_sweet_service),
):
    """Add `quantity` units (admin only)."""
    sweet = await service.restock(SweetId(sweet_id), body.quantity)
    return _one("Restock completed successfully", sweet)
