"""Authentication schemas."""

from pydantic import BaseModel, Field


class AuthPrincipal(BaseModel):
    """Identity claims decoded from a verified bearer token."""

    user_id: str = Field(min_length=1)
    username: str | None = None


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    token: str
    username: str
    name: str | None = None
