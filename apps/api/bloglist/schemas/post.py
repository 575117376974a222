"""Post API schemas."""

from pydantic import BaseModel


class CreatePostRequest(BaseModel):
    # Required-ness of title and url is enforced by PostService so a missing
    # field is reported as VALIDATION_ERROR with nothing persisted.
    title: str | None = None
    author: str | None = None
    url: str | None = None
    likes: int | None = None


class UpdatePostRequest(BaseModel):
    title: str | None = None
    author: str | None = None
    url: str | None = None
    likes: int | None = None


class PostOwner(BaseModel):
    id: str
    username: str
    name: str | None = None


class Post(BaseModel):
    id: str
    title: str
    author: str | None = None
    url: str
    likes: int
    user: PostOwner | None = None
