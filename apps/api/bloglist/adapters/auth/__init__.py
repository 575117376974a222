"""Auth token adapters."""

from .base import AuthVerificationError, TokenProvider
from .jwt_auth import JwtTokenProvider
from .mock_auth import MockTokenProvider

__all__ = [
    "AuthVerificationError",
    "TokenProvider",
    "JwtTokenProvider",
    "MockTokenProvider",
]
