"""Mock token provider for local development and tests."""

from bloglist.adapters.auth.base import AuthVerificationError, TokenProvider
from bloglist.schemas.auth import AuthPrincipal


class MockTokenProvider(TokenProvider):
    """Accepts deterministic test tokens only.

    Expected token format:
    - ``test:<user_id>``
    - ``test:<user_id>:<username>``
    """

    def issue_token(self, *, user_id: str, username: str) -> str:
        return f"test:{user_id}:{username}"

    def verify_token(self, token: str) -> AuthPrincipal:
        parts = token.split(":")
        if len(parts) not in (2, 3) or parts[0] != "test":
            raise AuthVerificationError("Invalid bearer token")

        user_id = parts[1].strip()
        username = parts[2].strip() if len(parts) == 3 else None

        if not user_id:
            raise AuthVerificationError("Bearer token missing user identity")

        return AuthPrincipal(user_id=user_id, username=username or None)


__all__ = ["MockTokenProvider"]
