"""Post routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from bloglist.repositories.memory import UserRecord
from bloglist.routes.dependencies import (
    get_authenticated_user,
    get_post_service,
    get_statistics_service,
)
from bloglist.schemas.error import ErrorResponse, ForbiddenError, NotFoundError, UnauthorizedError
from bloglist.schemas.post import CreatePostRequest, Post, UpdatePostRequest
from bloglist.schemas.stats import PostStatistics
from bloglist.services.posts import PostService
from bloglist.services.statistics import StatisticsService

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get("", response_model=list[Post])
async def list_posts(
    service: Annotated[PostService, Depends(get_post_service)],
) -> list[Post]:
    return service.list_posts()


@router.get("/stats", response_model=PostStatistics)
async def get_post_statistics(
    service: Annotated[StatisticsService, Depends(get_statistics_service)],
) -> PostStatistics:
    return service.summarize()


@router.get(
    "/{postId}",
    response_model=Post,
    responses={404: {"model": NotFoundError}},
)
async def get_post(
    post_id: Annotated[str, Path(alias="postId")],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Post:
    return service.get_post(post_id=post_id)


@router.post(
    "",
    response_model=Post,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 401: {"model": UnauthorizedError}},
)
async def create_post(
    payload: CreatePostRequest,
    user: Annotated[UserRecord, Depends(get_authenticated_user)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Post:
    return service.create_post(
        owner=user,
        title=payload.title,
        author=payload.author,
        url=payload.url,
        likes=payload.likes,
    )


@router.put(
    "/{postId}",
    response_model=Post,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": UnauthorizedError},
        403: {"model": ForbiddenError},
        404: {"model": NotFoundError},
    },
)
async def update_post(
    post_id: Annotated[str, Path(alias="postId")],
    payload: UpdatePostRequest,
    user: Annotated[UserRecord, Depends(get_authenticated_user)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Post:
    return service.update_post(
        actor=user,
        post_id=post_id,
        changes=payload.model_dump(exclude_unset=True),
    )


@router.delete(
    "/{postId}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        401: {"model": UnauthorizedError},
        403: {"model": ForbiddenError},
        404: {"model": NotFoundError},
    },
)
async def delete_post(
    post_id: Annotated[str, Path(alias="postId")],
    user: Annotated[UserRecord, Depends(get_authenticated_user)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Response:
    service.delete_post(actor=user, post_id=post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
