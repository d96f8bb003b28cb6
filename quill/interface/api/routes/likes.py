"""Like routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status

from quill.application.usecase.like import (
    LikePostRequest,
    LikePostResponse,
    LikePostUseCase,
    UnlikePostRequest,
    UnlikePostResponse,
    UnlikePostUseCase,
)
from quill.domain.error import BusinessRuleViolationError, NotFoundError
from quill.domain.service import JWTService
from quill.interface.api.identity import current_user_id

router = APIRouter(tags=["likes"], route_class=DishkaRoute)


@router.post(
    "/posts/{post_id}/like",
    response_model=LikePostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def like_post(
    post_id: UUID,
    http_request: Request,
    like_post_use_case: FromDishka[LikePostUseCase],
    jwt_service: FromDishka[JWTService],
) -> LikePostResponse:
    """Like a post.

    Requires authentication.

    Args:
        post_id: Post UUID
        http_request: Incoming request (carries the credentials)
        like_post_use_case: Like post use case from DI
        jwt_service: JWT service for token verification (injected)

    Returns:
        Like details

    Raises:
        HTTPException: If not authenticated, already liked, or post not found
    """
    user_id = current_user_id(http_request, jwt_service)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to like posts",
        )

    try:
        return await like_post_use_case.execute(
            LikePostRequest(post_id=str(post_id), user_id=str(user_id))
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except BusinessRuleViolationError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.delete("/posts/{post_id}/like", response_model=UnlikePostResponse)
async def unlike_post(
    post_id: UUID,
    http_request: Request,
    unlike_post_use_case: FromDishka[UnlikePostUseCase],
    jwt_service: FromDishka[JWTService],
) -> UnlikePostResponse:
    """Remove the caller's like from a post.

    Requires authentication.
    """
    user_id = current_user_id(http_request, jwt_service)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to unlike posts",
        )

    try:
        return await unlike_post_use_case.execute(
            UnlikePostRequest(post_id=str(post_id), user_id=str(user_id))
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
