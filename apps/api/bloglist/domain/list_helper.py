"""Summary statistics over post collections.

Every function takes an ordered sequence of post-like objects exposing
``title``, ``author`` and ``likes`` and never mutates or re-sorts it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from bloglist.schemas.stats import AuthorLikes, AuthorPostCount, FavoritePost


def total_likes(posts: Sequence[Any]) -> int:
    return sum(post.likes for post in posts)


def favorite_post(posts: Sequence[Any]) -> FavoritePost | None:
    """Return the most liked post as a ``{title, author, likes}`` projection.

    Ties keep the earliest post in input order.
    """
    favorite = None
    for post in posts:
        if favorite is None or post.likes > favorite.likes:
            favorite = post

    if favorite is None:
        return None
    return FavoritePost(title=favorite.title, author=favorite.author, likes=favorite.likes)


def author_with_most_posts(posts: Sequence[Any]) -> AuthorPostCount | None:
    """Return the author with the most posts; ties go to the author seen first."""
    if not posts:
        return None

    counts: dict[str | None, int] = {}
    for post in posts:
        counts[post.author] = counts.get(post.author, 0) + 1

    best_author, best_count = None, 0
    for author, count in counts.items():
        if count > best_count:
            best_author, best_count = author, count

    return AuthorPostCount(author=best_author, count=best_count)


def author_with_most_likes(posts: Sequence[Any]) -> AuthorLikes | None:
    """Return the author with the highest summed likes.

    The running best starts at ``("", 0)`` and is only replaced on a strictly
    greater total, so when every author totals 0 likes the result is
    ``AuthorLikes(author="", likes=0)`` rather than any real author.
    """
    if not posts:
        return None

    likes_by_author: dict[str | None, int] = {}
    for post in posts:
        likes_by_author[post.author] = likes_by_author.get(post.author, 0) + post.likes

    best = AuthorLikes(author="", likes=0)
    for author, likes in likes_by_author.items():
        if likes > best.likes:
            best = AuthorLikes(author=author, likes=likes)

    return best


__all__ = [
    "author_with_most_likes",
    "author_with_most_posts",
    "favorite_post",
    "total_likes",
]
