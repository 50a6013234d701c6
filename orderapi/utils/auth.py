"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..services.orders import OrderCatalog
from .token_gate import BEARER_PREFIX, TokenGate

bearer_scheme = HTTPBearer(
    scheme_name="Bearer",
    bearerFormat="JWT",
    description="Enter 'Bearer' [space] and then your token",
    auto_error=False,
)


def get_token_gate(request: Request) -> TokenGate:
    return request.app.state.token_gate


def get_order_catalog(request: Request) -> OrderCatalog:
    return request.app.state.order_catalog


async def require_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    gate: TokenGate = Depends(get_token_gate),
) -> int:
    """Count one use of the presented token; returns the usage count after the grant.

    ``HTTPBearer`` yields ``None`` for a missing header or a non-Bearer scheme,
    which the gate reports as a missing credential.
    """
    authorization = f"{BEARER_PREFIX}{credentials.credentials}" if credentials else None
    return gate.consume_token(authorization)
