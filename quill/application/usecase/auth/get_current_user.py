"""Get current user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from quill.domain.service import JWTService, UserService
from quill.domain.value import UserId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    name: str
    email: str
    created_at: datetime


class GetCurrentUserUseCase:
    """Use case for getting the user behind a token."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If the user no longer exists
        """
        payload = self.jwt_service.verify_token(request.token)
        user = await self.user_service.get_by_id(UserId(UUID(payload.user_id)))

        return GetCurrentUserResponse(
            user_id=str(user.id),
            name=user.name.root,
            email=user.email.root,
            created_at=user.created_at,
        )
