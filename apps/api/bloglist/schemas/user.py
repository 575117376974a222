"""User API schemas."""

from pydantic import BaseModel


class CreateUserRequest(BaseModel):
    username: str | None = None
    name: str | None = None
    password: str | None = None


class UserPost(BaseModel):
    id: str
    title: str
    author: str | None = None
    url: str
    likes: int


class User(BaseModel):
    id: str
    username: str
    name: str | None = None
    posts: list[UserPost] = []
