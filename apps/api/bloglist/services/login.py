"""Login service layer."""

from __future__ import annotations

import logging

from bloglist.adapters.auth import TokenProvider
from bloglist.core.logging_safety import safe_log_identifier
from bloglist.core.security import PasswordHasher
from bloglist.errors import ApiError
from bloglist.repositories.memory import InMemoryStore
from bloglist.schemas.auth import LoginResponse

logger = logging.getLogger(__name__)


class LoginService:
    def __init__(self, store: InMemoryStore, hasher: PasswordHasher, token_provider: TokenProvider) -> None:
        self._store = store
        self._hasher = hasher
        self._token_provider = token_provider

    def login(self, *, username: str, password: str) -> LoginResponse:
        user = self._store.get_user_by_username(username)
        # Unknown user and wrong password share one response.
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.warning("login.rejected username=%s", safe_log_identifier(username, prefix="uname"))
            raise ApiError(status_code=401, code="INVALID_CREDENTIALS", message="invalid username or password")

        token = self._token_provider.issue_token(user_id=user.id, username=user.username)
        logger.info("login.accepted user_id=%s", safe_log_identifier(user.id, prefix="uid"))
        return LoginResponse(token=token, username=user.username, name=user.name)
