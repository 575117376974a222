"""Authentication provider interfaces."""

from abc import ABC, abstractmethod

from bloglist.schemas.auth import AuthPrincipal


class AuthVerificationError(Exception):
    """Raised when a token cannot be verified or normalized."""


class TokenProvider(ABC):
    """Provider-neutral token issuing and verification interface."""

    @abstractmethod
    def verify_token(self, token: str) -> AuthPrincipal:
        """Verify token and return normalized principal."""

    @abstractmethod
    def issue_token(self, *, user_id: str, username: str) -> str:
        """Issue a token asserting the given identity."""


__all__ = ["AuthVerificationError", "TokenProvider"]
