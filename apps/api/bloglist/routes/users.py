"""User routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from bloglist.routes.dependencies import get_user_service
from bloglist.schemas.error import ErrorResponse
from bloglist.schemas.user import CreateUserRequest, User
from bloglist.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=list[User])
async def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[User]:
    return service.list_users()


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_user(
    payload: CreateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    return service.create_user(username=payload.username, name=payload.name, password=payload.password)
