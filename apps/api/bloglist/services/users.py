"""User service layer."""

from __future__ import annotations

import logging

from bloglist.core.logging_safety import safe_log_identifier
from bloglist.core.security import PasswordHasher
from bloglist.errors import ValidationError
from bloglist.repositories.memory import InMemoryStore, UserRecord
from bloglist.schemas.user import User, UserPost

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        store: InMemoryStore,
        hasher: PasswordHasher,
        *,
        username_min_length: int = 3,
        password_min_length: int = 3,
    ) -> None:
        self._store = store
        self._hasher = hasher
        self._username_min_length = username_min_length
        self._password_min_length = password_min_length

    def create_user(self, *, username: str | None, name: str | None, password: str | None) -> User:
        if not username or not password:
            raise ValidationError("username and password are required")
        if len(username) < self._username_min_length:
            raise ValidationError(
                f"username must be at least {self._username_min_length} characters long",
                details={"field": "username", "min_length": self._username_min_length},
            )
        if len(password) < self._password_min_length:
            raise ValidationError(
                f"password must be at least {self._password_min_length} characters long",
                details={"field": "password", "min_length": self._password_min_length},
            )
        if self._store.get_user_by_username(username) is not None:
            raise ValidationError("expected `username` to be unique", details={"field": "username"})

        record = self._store.create_user(
            username=username,
            name=name,
            password_hash=self._hasher.hash(password),
        )
        logger.info("user.created user_id=%s", safe_log_identifier(record.id, prefix="uid"))
        return self._to_user(record)

    def list_users(self) -> list[User]:
        return [self._to_user(record) for record in self._store.list_users()]

    def _to_user(self, record: UserRecord) -> User:
        return User(
            id=record.id,
            username=record.username,
            name=record.name,
            posts=[
                UserPost(id=post.id, title=post.title, author=post.author, url=post.url, likes=post.likes)
                for post in self._store.posts_for_user(record)
            ],
        )
