"""Software-only simulation / demo - no real systems will be contacted or modified.

Single-slot bearer token gate.

One token exists at a time. Issuance is capped per fixed window, each token is
capped per use, and both the window and the token expiry are evaluated lazily
against the injected clock on every call.
"""
from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, NoReturn, Optional

from ..logging_config import logger
from .clock import Clock, SystemClock

BEARER_PREFIX = "Bearer "
TOKEN_TYPE = "Bearer"


class TokenGateError(Exception):
    error_code = "TOKEN_GATE_ERROR"
    status_code = 400
    default_message = "Token request rejected"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class RateLimitExceeded(TokenGateError):
    error_code = "RATE_LIMIT_EXCEEDED"
    status_code = 429
    default_message = "Hourly token request limit exceeded. Please try again later."


class TokenAlreadyActive(TokenGateError):
    error_code = "TOKEN_ALREADY_ACTIVE"
    status_code = 400
    default_message = (
        "An active token already exists. Wait for it to expire or reach its usage limit before requesting a new one."
    )


class TokenUsageExhausted(TokenGateError):
    error_code = "TOKEN_USAGE_EXHAUSTED"
    status_code = 403
    default_message = "Token usage limit reached. Wait for the current token to expire before requesting a new one."


class MissingCredential(TokenGateError):
    error_code = "MISSING_CREDENTIAL"
    status_code = 401
    default_message = "No valid Authorization header found. Send it as 'Bearer <token>'."


class InvalidCredential(TokenGateError):
    error_code = "INVALID_CREDENTIAL"
    status_code = 401
    default_message = "The supplied token is not valid."


class CredentialExpired(TokenGateError):
    error_code = "CREDENTIAL_EXPIRED"
    status_code = 401
    default_message = "The token has expired. Please request a new token."


class UsageExhausted(TokenGateError):
    error_code = "USAGE_EXHAUSTED"
    status_code = 403
    default_message = "Token usage limit reached. Wait for the token to expire before requesting a new one."


@dataclass(frozen=True)
class TokenLimits:
    token_limit: int = 5
    token_window_seconds: int = 3600
    token_usage_limit: int = 5
    expiry_margin_seconds: int = 5

    def __post_init__(self) -> None:
        if self.token_limit < 1:
            raise ValueError("token_limit must be at least 1")
        if self.token_usage_limit < 1:
            raise ValueError("token_usage_limit must be at least 1")
        if self.expiry_margin_seconds < 0:
            raise ValueError("expiry_margin_seconds must not be negative")
        if self.token_window_seconds <= self.expiry_margin_seconds:
            raise ValueError("token_window_seconds must exceed expiry_margin_seconds")

    @property
    def token_lifetime(self) -> timedelta:
        return timedelta(seconds=self.token_window_seconds - self.expiry_margin_seconds)

    @property
    def window_length(self) -> timedelta:
        return timedelta(seconds=self.token_window_seconds)


@dataclass
class TokenWindow:
    window_start: Optional[datetime] = None
    request_count: int = 0
    usage_count: int = 0
    current_token: Optional[str] = None
    token_expires_at: Optional[datetime] = None

    def roll_over(self, now: datetime) -> None:
        self.window_start = now
        self.request_count = 0
        self.usage_count = 0
        self.current_token = None
        self.token_expires_at = None


@dataclass(frozen=True)
class IssuedToken:
    access_token: str
    expires_in: int
    token_type: str = TOKEN_TYPE


@dataclass(frozen=True)
class TokenStatus:
    token_window_resets_in_seconds: int
    token_active: bool
    token: Optional[str]
    token_expires_in_seconds: int
    token_usage_count: int


def _whole_seconds(delta: timedelta) -> int:
    # truncates toward zero, so a token one and a half seconds past expiry reports -1
    return int(delta.total_seconds())


def default_token_factory() -> str:
    return str(uuid.uuid4())


class TokenGate:
    def __init__(
        self,
        limits: TokenLimits | None = None,
        clock: Clock | None = None,
        token_factory: Callable[[], str] | None = None,
        redact_inactive_token: bool = False,
    ) -> None:
        self.limits = limits or TokenLimits()
        self.clock = clock or SystemClock()
        self._token_factory = token_factory or default_token_factory
        self._redact_inactive_token = redact_inactive_token
        self._window = TokenWindow()
        self._lock = threading.Lock()

    def snapshot(self) -> TokenWindow:
        with self._lock:
            w = self._window
            return TokenWindow(w.window_start, w.request_count, w.usage_count, w.current_token, w.token_expires_at)

    def _token_live(self, now: datetime) -> bool:
        w = self._window
        return bool(w.current_token) and w.token_expires_at is not None and now < w.token_expires_at

    def issue_token(self) -> IssuedToken:
        with self._lock:
            now = self.clock.now()
            window = self._window
            if window.window_start is None or now > window.window_start + self.limits.window_length:
                had_window = window.window_start is not None
                window.roll_over(now)
                if had_window:
                    logger.info("token.window_rollover", window_start=now.isoformat())

            if window.request_count >= self.limits.token_limit:
                self._reject(RateLimitExceeded(), request_count=window.request_count)

            if self._token_live(now):
                if window.usage_count >= self.limits.token_usage_limit:
                    self._reject(TokenUsageExhausted(), usage_count=window.usage_count)
                self._reject(TokenAlreadyActive(), usage_count=window.usage_count)

            window.request_count += 1
            window.usage_count = 0
            window.current_token = self._token_factory()
            window.token_expires_at = now + self.limits.token_lifetime
            issued = IssuedToken(
                access_token=window.current_token,
                expires_in=_whole_seconds(window.token_expires_at - now),
            )
            logger.info(
                "token.issued",
                request_count=window.request_count,
                expires_at=window.token_expires_at.isoformat(),
            )
            return issued

    def query_status(self) -> TokenStatus:
        with self._lock:
            now = self.clock.now()
            w = self._window
            if w.window_start is None:
                resets_in = 0
            else:
                resets_in = max(_whole_seconds(w.window_start + self.limits.window_length - now), 0)
            active = self._token_live(now) and w.usage_count < self.limits.token_usage_limit
            expires_in = 0 if w.token_expires_at is None else _whole_seconds(w.token_expires_at - now)
            token = w.current_token
            if self._redact_inactive_token and not active:
                token = None
            return TokenStatus(
                token_window_resets_in_seconds=resets_in,
                token_active=active,
                token=token,
                token_expires_in_seconds=expires_in,
                token_usage_count=w.usage_count,
            )

    def consume_token(self, authorization: str | None) -> int:
        """Validate a raw ``Authorization`` header value and count one use.

        Returns the usage count after the grant. Raises a ``TokenGateError``
        subclass without touching state when the credential is refused.
        """
        presented = parse_bearer(authorization)
        with self._lock:
            now = self.clock.now()
            w = self._window
            if w.current_token is None or presented != w.current_token:
                self._reject(InvalidCredential())
            if w.token_expires_at is None or now > w.token_expires_at:
                self._reject(CredentialExpired())
            if w.usage_count >= self.limits.token_usage_limit:
                self._reject(UsageExhausted(), usage_count=w.usage_count)
            w.usage_count += 1
            logger.info("orders.access_granted", usage_count=w.usage_count)
            return w.usage_count

    def _reject(self, error: TokenGateError, **context: object) -> NoReturn:
        logger.warning("token.rejected", error_code=error.error_code, status=error.status_code, **context)
        raise error


def parse_bearer(authorization: str | None) -> str:
    if not authorization or authorization[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX.lower():
        logger.warning("token.rejected", error_code=MissingCredential.error_code, status=MissingCredential.status_code)
        raise MissingCredential()
    return authorization[len(BEARER_PREFIX):].strip()
