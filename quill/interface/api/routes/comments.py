"""Comment routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, Field

from quill.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from quill.domain.error import (
    ForbiddenError,
    NotFoundError,
    ThreadTooDeepError,
    ValidationError,
)
from quill.domain.service import JWTService
from quill.interface.api.identity import current_user_id

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    text: str = Field(min_length=1, max_length=10000)
    parent_id: UUID | None = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for updating a comment."""

    text: str = Field(min_length=1, max_length=10000)


@router.get("/posts/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: UUID,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
) -> GetCommentsResponse:
    """Get all comments for a post as a flat list, oldest first.

    Clients nest the list into reply threads themselves using ``parent_id``.

    Args:
        post_id: Post UUID
        get_comments_use_case: Get comments use case from DI

    Returns:
        Flat list of comments

    Raises:
        HTTPException: 404 if the post doesn't exist
    """
    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(post_id=str(post_id))
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/posts/{post_id}/comments/tree", response_model=GetCommentTreeResponse)
async def get_comment_tree(
    post_id: UUID,
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
) -> GetCommentTreeResponse:
    """Get a post's comments already nested into reply threads."""
    try:
        return await get_comment_tree_use_case.execute(
            GetCommentTreeRequest(post_id=str(post_id))
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ThreadTooDeepError as e:
        logfire.warn("Comment tree too deep to nest", post_id=str(post_id), depth=e.depth)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )


@router.post(
    "/posts/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CreateCommentAPIRequest,
    http_request: Request,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment creation data
        http_request: Incoming request (carries the credentials)
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)

    Returns:
        Created comment details

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user_id = current_user_id(http_request, jwt_service)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to create comments",
        )

    try:
        use_case_request = CreateCommentRequest(
            post_id=str(post_id),
            text=request.text,
            author_id=str(user_id),
            parent_id=str(request.parent_id) if request.parent_id else None,
        )
        return await create_comment_use_case.execute(use_case_request)
    except NotFoundError as e:
        logfire.warn("Comment creation failed", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/comments/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: UUID,
    request: UpdateCommentAPIRequest,
    http_request: Request,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
) -> UpdateCommentResponse:
    """Update a comment's text content.

    Only the comment author can edit.

    Args:
        comment_id: Comment UUID
        request: Update data (text content)
        http_request: Incoming request (carries the credentials)
        update_comment_use_case: Update comment use case from DI
        jwt_service: JWT service for token verification (injected)

    Returns:
        Updated comment details

    Raises:
        HTTPException: If not authenticated, not authorized, or validation fails
    """
    user_id = current_user_id(http_request, jwt_service)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to edit comments",
        )

    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=str(comment_id),
                user_id=str(user_id),
                text=request.text,
            )
        )
    except ForbiddenError as e:
        logfire.warn("Unauthorized comment update attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to edit this comment",
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        logfire.warn("Comment update validation error", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: UUID,
    http_request: Request,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
) -> DeleteCommentResponse:
    """Delete a comment and every reply beneath it.

    The comment's author and the author of the post it belongs to may
    delete it.

    Raises:
        HTTPException: If not authenticated, not authorized, or already gone
    """
    user_id = current_user_id(http_request, jwt_service)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to delete comments",
        )

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=str(comment_id), user_id=str(user_id))
        )
    except ForbiddenError as e:
        logfire.warn("Unauthorized comment delete attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
