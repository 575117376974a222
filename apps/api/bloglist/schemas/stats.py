"""Post statistics schemas."""

from pydantic import BaseModel


class FavoritePost(BaseModel):
    title: str
    author: str | None = None
    likes: int


class AuthorPostCount(BaseModel):
    author: str | None = None
    count: int


class AuthorLikes(BaseModel):
    author: str | None = None
    likes: int


class PostStatistics(BaseModel):
    total_likes: int
    favorite_post: FavoritePost | None = None
    most_posts: AuthorPostCount | None = None
    most_likes: AuthorLikes | None = None
