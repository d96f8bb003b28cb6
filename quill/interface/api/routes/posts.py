"""Post routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, Request, status
from pydantic import BaseModel, Field

from quill.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    UpdatePostRequest,
    UpdatePostResponse,
    UpdatePostUseCase,
)
from quill.domain.error import ForbiddenError, NotFoundError, ValidationError
from quill.domain.service import JWTService
from quill.interface.api.identity import current_user_id

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=100000)  # Rich text (HTML)


class UpdatePostAPIRequest(BaseModel):
    """API request for editing a post. Omitted fields stay unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=300)
    content: str | None = Field(default=None, min_length=1, max_length=100000)


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    http_request: Request,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
) -> CreatePostResponse:
    """Create a new post.

    Requires authentication.

    Args:
        request: Post creation data
        http_request: Incoming request (carries the credentials)
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service for token verification (injected)

    Returns:
        Created post

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user_id = current_user_id(http_request, jwt_service)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to create posts",
        )

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                title=request.title,
                content=request.content,
                author_id=str(user_id),
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        logfire.warn("Post creation failed - author not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    http_request: Request,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=30, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListPostsResponse:
    """List posts, newest first.

    If authenticated, each post says whether the caller has liked it.
    """
    user_id = current_user_id(http_request, jwt_service)
    return await list_posts_use_case.execute(
        ListPostsRequest(
            limit=limit,
            offset=offset,
            user_id=str(user_id) if user_id else None,
        )
    )


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: UUID,
    http_request: Request,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
) -> GetPostResponse:
    """Get a single post.

    Raises:
        HTTPException: 404 if the post doesn't exist
    """
    user_id = current_user_id(http_request, jwt_service)
    try:
        return await get_post_use_case.execute(
            GetPostRequest(
                post_id=str(post_id),
                user_id=str(user_id) if user_id else None,
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{post_id}", response_model=UpdatePostResponse)
async def update_post(
    post_id: UUID,
    request: UpdatePostAPIRequest,
    http_request: Request,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    jwt_service: FromDishka[JWTService],
) -> UpdatePostResponse:
    """Edit a post's title and/or content.

    Only the post author can edit.

    Raises:
        HTTPException: If not authenticated, not the author, missing, or invalid
    """
    user_id = current_user_id(http_request, jwt_service)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to edit posts",
        )

    try:
        return await update_post_use_case.execute(
            UpdatePostRequest(
                post_id=str(post_id),
                user_id=str(user_id),
                title=request.title,
                content=request.content,
            )
        )
    except ForbiddenError as e:
        logfire.warn("Unauthorized post update attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to edit this post",
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: UUID,
    http_request: Request,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
) -> DeletePostResponse:
    """Delete a post together with its comments and likes.

    Only the post author can delete.
    """
    user_id = current_user_id(http_request, jwt_service)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to delete posts",
        )

    try:
        return await delete_post_use_case.execute(
            DeletePostRequest(post_id=str(post_id), user_id=str(user_id))
        )
    except ForbiddenError as e:
        logfire.warn("Unauthorized post delete attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this post",
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
