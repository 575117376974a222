"""Application exception types."""

from bloglist.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(self, status_code: int, code: str, message: str, details: dict | None = None) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(code=code, message=message, details=details)
        super().__init__(message)


class _KindError(ApiError):
    """ApiError with a fixed status code and error code per subclass."""

    status_code_for_kind: int = 500
    code_for_kind: str = "INTERNAL_ERROR"
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None, details: dict | None = None) -> None:
        super().__init__(
            status_code=self.status_code_for_kind,
            code=self.code_for_kind,
            message=message or self.default_message,
            details=details,
        )


class ValidationError(_KindError):
    status_code_for_kind = 400
    code_for_kind = "VALIDATION_ERROR"
    default_message = "Invalid request payload"


class TokenMissing(_KindError):
    status_code_for_kind = 401
    code_for_kind = "TOKEN_MISSING"
    default_message = "Missing bearer token"


class TokenInvalid(_KindError):
    status_code_for_kind = 401
    code_for_kind = "TOKEN_INVALID"
    default_message = "Invalid bearer token"


class UserNotFound(_KindError):
    status_code_for_kind = 401
    code_for_kind = "USER_NOT_FOUND"
    default_message = "User for bearer token not found"


class Forbidden(_KindError):
    status_code_for_kind = 403
    code_for_kind = "FORBIDDEN"
    default_message = "Only the owner may modify this resource"


class NotFound(_KindError):
    status_code_for_kind = 404
    code_for_kind = "RESOURCE_NOT_FOUND"
    default_message = "Resource not found"


__all__ = [
    "ApiError",
    "Forbidden",
    "NotFound",
    "TokenInvalid",
    "TokenMissing",
    "UserNotFound",
    "ValidationError",
]
