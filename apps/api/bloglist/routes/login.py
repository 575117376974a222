"""Login route."""

from typing import Annotated

from fastapi import APIRouter, Depends

from bloglist.routes.dependencies import get_login_service
from bloglist.schemas.auth import LoginRequest, LoginResponse
from bloglist.schemas.error import UnauthorizedError
from bloglist.services.login import LoginService

router = APIRouter(prefix="/login", tags=["Login"])


@router.post(
    "",
    response_model=LoginResponse,
    responses={401: {"model": UnauthorizedError}},
)
def login(
    payload: LoginRequest,
    service: Annotated[LoginService, Depends(get_login_service)],
) -> LoginResponse:
    return service.login(username=payload.username, password=payload.password)
