"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ..models.schemas import ErrorResponse, Order
from ..services.orders import OrderCatalog
from ..utils.auth import get_order_catalog, require_bearer_token

router = APIRouter(tags=["orders"])


@router.get(
    "/orders",
    response_model=List[Order],
    responses={
        401: {"model": ErrorResponse, "description": "Missing, invalid or expired bearer token"},
        403: {"model": ErrorResponse, "description": "Token usage limit reached"},
    },
)
async def list_orders(
    _usage: int = Depends(require_bearer_token),
    catalog: OrderCatalog = Depends(get_order_catalog),
) -> List[Order]:
    return catalog.list_orders()
