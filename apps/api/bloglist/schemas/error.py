"""API error response schemas."""

from typing import Any
from typing import Literal

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


class NotFoundError(BaseModel):
    code: Literal["RESOURCE_NOT_FOUND"]
    message: str


class ForbiddenError(BaseModel):
    code: Literal["FORBIDDEN"]
    message: str


class UnauthorizedError(BaseModel):
    code: Literal["TOKEN_MISSING", "TOKEN_INVALID", "USER_NOT_FOUND", "INVALID_CREDENTIALS"]
    message: str
