"""In-memory document store used by the API and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

_UPDATABLE_POST_FIELDS = frozenset({"title", "author", "url", "likes"})


@dataclass(slots=True)
class UserRecord:
    id: str
    username: str
    name: str | None
    password_hash: str
    created_at: datetime
    post_ids: list[str] = field(default_factory=list)


@dataclass(slots=True)
class PostRecord:
    id: str
    title: str
    author: str | None
    url: str
    likes: int
    user_id: str
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(slots=True)
class InMemoryStore:
    """Simple, deterministic persistence layer with id-based relations.

    Posts reference their owner through ``user_id`` and users list their posts
    through ``post_ids``; the store keeps both sides in step.
    """

    posts: dict[str, PostRecord] = field(default_factory=dict)
    users: dict[str, UserRecord] = field(default_factory=dict)
    post_write_count: int = 0
    user_write_count: int = 0
    # When set, the next owner link during post creation fails with this message.
    post_link_failure_message: str | None = None

    def list_posts(self) -> list[PostRecord]:
        return list(self.posts.values())

    def get_post(self, post_id: str) -> PostRecord | None:
        return self.posts.get(post_id)

    def create_post_for_owner(
        self,
        *,
        owner: UserRecord,
        title: str,
        author: str | None,
        url: str,
        likes: int,
    ) -> PostRecord:
        """Insert a post and append it to the owner's post list; rollback the insert on failure."""
        post = PostRecord(
            id=str(uuid4()),
            title=title,
            author=author,
            url=url,
            likes=likes,
            user_id=owner.id,
            created_at=datetime.now(UTC),
        )
        previous_post_write_count = self.post_write_count
        self.posts[post.id] = post
        self.post_write_count += 1

        try:
            self._link_post_to_owner(owner=owner, post_id=post.id)
        except Exception:
            self.posts.pop(post.id, None)
            self.post_write_count = previous_post_write_count
            raise
        return post

    def update_post(self, post_id: str, changes: dict[str, Any]) -> PostRecord | None:
        post = self.posts.get(post_id)
        if post is None:
            return None

        # Unknown keys are ignored; ownership is never reassigned through updates.
        applied = {key: value for key, value in changes.items() if key in _UPDATABLE_POST_FIELDS}
        if not applied:
            return post

        for key, value in applied.items():
            setattr(post, key, value)
        post.updated_at = datetime.now(UTC)
        self.post_write_count += 1
        return post

    def delete_post(self, post_id: str) -> bool:
        post = self.posts.pop(post_id, None)
        if post is None:
            return False
        self.post_write_count += 1

        owner = self.users.get(post.user_id)
        if owner is not None and post_id in owner.post_ids:
            owner.post_ids.remove(post_id)
            self.user_write_count += 1
        return True

    def list_users(self) -> list[UserRecord]:
        users = list(self.users.values())
        users.sort(key=lambda record: record.created_at)
        return users

    def get_user(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> UserRecord | None:
        for user in self.users.values():
            if user.username == username:
                return user
        return None

    def create_user(self, *, username: str, name: str | None, password_hash: str) -> UserRecord:
        user = UserRecord(
            id=str(uuid4()),
            username=username,
            name=name,
            password_hash=password_hash,
            created_at=datetime.now(UTC),
        )
        self.users[user.id] = user
        self.user_write_count += 1
        return user

    def posts_for_user(self, user: UserRecord) -> list[PostRecord]:
        return [self.posts[post_id] for post_id in user.post_ids if post_id in self.posts]

    def _link_post_to_owner(self, *, owner: UserRecord, post_id: str) -> None:
        if self.post_link_failure_message is not None:
            message = self.post_link_failure_message
            self.post_link_failure_message = None
            raise RuntimeError(message)

        owner.post_ids.append(post_id)
        self.user_write_count += 1
