"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..models.schemas import SystemHealth
from ..services.orders import OrderCatalog
from ..utils.auth import get_order_catalog

router = APIRouter(tags=["health"])


@router.get("/health", response_model=SystemHealth)
async def health(catalog: OrderCatalog = Depends(get_order_catalog)) -> SystemHealth:
    components = {
        "token_gate": "in-memory",
        "orders": f"static:{len(catalog)}",
    }
    return SystemHealth(status="ok", components=components)
