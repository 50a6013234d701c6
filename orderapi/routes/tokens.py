"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..models.schemas import ErrorResponse, TokenResponse, TokenStatusResponse
from ..utils.auth import get_token_gate
from ..utils.token_gate import TokenGate

router = APIRouter(tags=["tokens"])


@router.post(
    "/get-token",
    response_model=TokenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "A token is already active"},
        403: {"model": ErrorResponse, "description": "Active token has reached its usage limit"},
        429: {"model": ErrorResponse, "description": "Token request limit for the window exceeded"},
    },
)
async def get_token(gate: TokenGate = Depends(get_token_gate)) -> TokenResponse:
    issued = gate.issue_token()
    return TokenResponse(token_type=issued.token_type, access_token=issued.access_token, expires_in=issued.expires_in)


@router.get("/token-status", response_model=TokenStatusResponse)
async def token_status(gate: TokenGate = Depends(get_token_gate)) -> TokenStatusResponse:
    return TokenStatusResponse.model_validate(gate.query_status())
