"""Request authentication and post ownership checks.

The gate runs in stages and stops at the first rejection:

1. ``extract_bearer_token`` reads the ``Authorization`` header value.
2. ``AuthGate.verify`` checks the token with the configured provider.
3. ``AuthGate.resolve_user`` loads the user named by the token.
4. ``ensure_post_owner`` compares that user with a post's owner.

Rejections are raised as typed ``ApiError`` subclasses; nothing here logs.
"""

from __future__ import annotations

from bloglist.adapters.auth import AuthVerificationError, TokenProvider
from bloglist.errors import Forbidden, TokenInvalid, TokenMissing, UserNotFound
from bloglist.repositories.memory import InMemoryStore, PostRecord, UserRecord
from bloglist.schemas.auth import AuthPrincipal

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token after an exact ``Bearer `` prefix, else ``None``."""
    if authorization and authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):]
    return None


def ensure_post_owner(user: UserRecord, post: PostRecord) -> None:
    if post.user_id != user.id:
        raise Forbidden()


class AuthGate:
    def __init__(self, *, store: InMemoryStore, token_provider: TokenProvider) -> None:
        self._store = store
        self._token_provider = token_provider

    def verify(self, token: str | None) -> AuthPrincipal:
        if not token:
            raise TokenMissing()

        try:
            return self._token_provider.verify_token(token)
        except AuthVerificationError as exc:
            raise TokenInvalid(str(exc) or None) from exc

    def resolve_user(self, principal: AuthPrincipal) -> UserRecord:
        user = self._store.get_user(principal.user_id)
        if user is None:
            raise UserNotFound()
        return user

    def authenticate(self, token: str | None) -> UserRecord:
        return self.resolve_user(self.verify(token))


__all__ = ["AuthGate", "BEARER_PREFIX", "ensure_post_owner", "extract_bearer_token"]
