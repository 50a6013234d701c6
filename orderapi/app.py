"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import time
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .logging_config import logger, setup_logging
from .routes import health, orders, tokens
from .services.orders import OrderCatalog
from .utils.clock import Clock, SystemClock
from .utils.token_gate import TokenGate, TokenGateError, TokenLimits


def build_token_gate(settings: Settings, clock: Clock, token_factory: Callable[[], str] | None = None) -> TokenGate:
    limits = TokenLimits(
        token_limit=settings.token_limit,
        token_window_seconds=settings.token_window_seconds,
        token_usage_limit=settings.token_usage_limit,
        expiry_margin_seconds=settings.token_expiry_margin_seconds,
    )
    return TokenGate(
        limits=limits,
        clock=clock,
        token_factory=token_factory,
        redact_inactive_token=settings.redact_inactive_token,
    )


def create_app(
    settings: Settings | None = None,
    clock: Clock | None = None,
    token_factory: Callable[[], str] | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    clock = clock or SystemClock()
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, version="1.0.0")
    app.state.settings = settings
    app.state.token_gate = build_token_gate(settings, clock, token_factory)
    app.state.order_catalog = OrderCatalog.seeded(clock.now())

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request.completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    @app.exception_handler(TokenGateError)
    async def token_gate_error_handler(request: Request, exc: TokenGateError) -> JSONResponse:
        logger.warning("api.error", path=request.url.path, error_code=exc.error_code, status=exc.status_code)
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "error_code": exc.error_code},
            headers=headers,
        )

    app.include_router(health.router)
    app.include_router(tokens.router)
    app.include_router(orders.router)

    logger.info(
        "app.start",
        mode="simulation",
        token_limit=settings.token_limit,
        token_window_seconds=settings.token_window_seconds,
        token_usage_limit=settings.token_usage_limit,
    )
    return app


app = create_app()
