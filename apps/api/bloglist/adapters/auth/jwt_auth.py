"""JSON Web Token provider backed by a shared secret."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
from jwt.exceptions import PyJWTError

from bloglist.adapters.auth.base import AuthVerificationError, TokenProvider
from bloglist.schemas.auth import AuthPrincipal


class JwtTokenProvider(TokenProvider):
    """Signs and verifies HMAC JWTs carrying the user id as the ``id`` claim."""

    def __init__(self, secret_key: str, *, algorithm: str = "HS256", expires_in: timedelta | None = None) -> None:
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_in = expires_in or timedelta(hours=1)

    def issue_token(self, *, user_id: str, username: str) -> str:
        now = datetime.now(UTC)
        claims = {
            "id": user_id,
            "sub": user_id,
            "username": username,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify_token(self, token: str) -> AuthPrincipal:
        try:
            decoded = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise AuthVerificationError("Bearer token expired") from exc
        except PyJWTError as exc:
            raise AuthVerificationError("Invalid bearer token") from exc

        user_id = str(decoded.get("id") or decoded.get("sub") or "").strip()
        if not user_id:
            raise AuthVerificationError("Bearer token missing user identity")

        username = decoded.get("username")
        return AuthPrincipal(user_id=user_id, username=username if isinstance(username, str) else None)


__all__ = ["JwtTokenProvider"]
