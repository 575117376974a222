"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader

from bloglist.adapters.auth import JwtTokenProvider, MockTokenProvider, TokenProvider
from bloglist.core.config import Settings, get_settings
from bloglist.core.logging_safety import safe_log_identifier, token_shape
from bloglist.core.security import PasswordHasher
from bloglist.errors import ApiError
from bloglist.repositories.memory import InMemoryStore, UserRecord
from bloglist.services.auth_gate import AuthGate, extract_bearer_token
from bloglist.services.login import LoginService
from bloglist.services.posts import PostService
from bloglist.services.statistics import StatisticsService
from bloglist.services.users import UserService

authorization_scheme = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    scheme_name="bearerAuth",
    description="Bearer <token>",
)
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_request_correlation_id(request: Request) -> str:
    return _request_correlation_id(request)


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_provider(settings: Annotated[Settings, Depends(get_settings)]) -> TokenProvider:
    """Resolve provider adapter from configuration."""
    if settings.auth_provider == "jwt":
        return JwtTokenProvider(
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
            expires_in=timedelta(minutes=settings.access_token_expire_minutes),
        )
    return MockTokenProvider()


def get_auth_gate(
    store: Annotated[InMemoryStore, Depends(get_store)],
    token_provider: Annotated[TokenProvider, Depends(get_token_provider)],
) -> AuthGate:
    return AuthGate(store=store, token_provider=token_provider)


def get_request_token(
    request: Request,
    authorization: Annotated[str | None, Security(authorization_scheme)],
) -> str | None:
    """Extract the bearer token and attach it to request state; absence is not an error here."""
    token = extract_bearer_token(authorization)
    request.state.token = token
    return token


async def get_authenticated_user(
    request: Request,
    token: Annotated[str | None, Depends(get_request_token)],
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
) -> UserRecord:
    """Run the auth gate and attach the acting user to request context."""
    correlation_id = _request_correlation_id(request)
    safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")

    try:
        user = gate.authenticate(token)
    except ApiError as exc:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=%s token=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
            exc.payload.code.lower(),
            token_shape(token),
        )
        raise

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s user_id=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_log_identifier(user.id, prefix="uid"),
    )
    request.state.user = user
    return user


def get_post_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> PostService:
    return PostService(store)


def get_statistics_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> StatisticsService:
    return StatisticsService(store)


def get_user_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserService:
    return UserService(
        store,
        hasher,
        username_min_length=settings.username_min_length,
        password_min_length=settings.password_min_length,
    )


def get_login_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    token_provider: Annotated[TokenProvider, Depends(get_token_provider)],
) -> LoginService:
    return LoginService(store, hasher, token_provider)
