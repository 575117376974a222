"""Post service layer."""

from __future__ import annotations

import logging
from typing import Any

from bloglist.core.logging_safety import safe_log_identifier
from bloglist.errors import NotFound, ValidationError
from bloglist.repositories.memory import InMemoryStore, PostRecord, UserRecord
from bloglist.schemas.post import Post, PostOwner
from bloglist.services.auth_gate import ensure_post_owner

logger = logging.getLogger(__name__)

_REQUIRED_POST_FIELDS = ("title", "url")


class PostService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_posts(self) -> list[Post]:
        return [self._to_post(record) for record in self._store.list_posts()]

    def get_post(self, *, post_id: str) -> Post:
        return self._to_post(self._require_post(post_id))

    def create_post(
        self,
        *,
        owner: UserRecord,
        title: str | None,
        url: str | None,
        author: str | None = None,
        likes: int | None = None,
    ) -> Post:
        if not title or not url:
            raise ValidationError("title or url is missing")

        record = self._store.create_post_for_owner(
            owner=owner,
            title=title,
            author=author,
            url=url,
            likes=likes if likes is not None else 0,
        )
        logger.info(
            "post.created post_id=%s owner_id=%s",
            safe_log_identifier(record.id, prefix="post"),
            safe_log_identifier(owner.id, prefix="uid"),
        )
        return self._to_post(record)

    def update_post(self, *, actor: UserRecord, post_id: str, changes: dict[str, Any]) -> Post:
        record = self._require_post(post_id)
        ensure_post_owner(actor, record)

        for key in _REQUIRED_POST_FIELDS:
            if key in changes and not changes[key]:
                raise ValidationError(f"{key} must not be empty")
        if "likes" in changes and changes["likes"] is None:
            raise ValidationError("likes must be an integer")

        updated = self._store.update_post(post_id, changes)
        if updated is None:
            raise NotFound()
        return self._to_post(updated)

    def delete_post(self, *, actor: UserRecord, post_id: str) -> None:
        record = self._require_post(post_id)
        ensure_post_owner(actor, record)

        self._store.delete_post(post_id)
        logger.info(
            "post.deleted post_id=%s owner_id=%s",
            safe_log_identifier(post_id, prefix="post"),
            safe_log_identifier(actor.id, prefix="uid"),
        )

    def _require_post(self, post_id: str) -> PostRecord:
        record = self._store.get_post(post_id)
        if record is None:
            raise NotFound()
        return record

    def _to_post(self, record: PostRecord) -> Post:
        owner = self._store.get_user(record.user_id)
        return Post(
            id=record.id,
            title=record.title,
            author=record.author,
            url=record.url,
            likes=record.likes,
            user=PostOwner(id=owner.id, username=owner.username, name=owner.name) if owner else None,
        )
