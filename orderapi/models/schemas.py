"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """Base schema with attribute extraction enabled."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class SystemHealth(BaseSchema):
    status: str
    components: Dict[str, str] = Field(default_factory=dict)


class Order(BaseSchema):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, frozen=True)

    id: int
    product_id: int = Field(alias="productId")
    quantity: int
    order_date: datetime = Field(alias="orderDate")


class TokenResponse(BaseSchema):
    token_type: str = "Bearer"
    access_token: str
    expires_in: int


class TokenStatusResponse(BaseSchema):
    token_window_resets_in_seconds: int
    token_active: bool
    token: Optional[str] = None
    token_expires_in_seconds: int
    token_usage_count: int


class ErrorResponse(BaseSchema):
    error: str
    error_code: str
