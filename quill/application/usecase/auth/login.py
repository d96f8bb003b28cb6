"""Login use case."""

from pydantic import BaseModel

from quill.domain.error import InvalidCredentialsError
from quill.domain.service import JWTService, UserService
from quill.domain.value import Email

from .register import AuthResponse


class LoginRequest(BaseModel):
    """Login request."""

    email: str
    password: str


class LoginUseCase:
    """Use case for email/password login."""

    def __init__(self, user_service: UserService, jwt_service: JWTService) -> None:
        """Initialize login use case.

        Args:
            user_service: User domain service
            jwt_service: JWT token domain service
        """
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> AuthResponse:
        """Execute login flow.

        Steps:
        1. Check the credentials
        2. Issue a JWT for the user

        Args:
            request: Login request

        Returns:
            User details and a fresh token

        Raises:
            InvalidCredentialsError: If email or password don't match
        """
        try:
            email = Email(request.email)
        except ValueError as e:
            # A malformed address can't belong to anyone
            raise InvalidCredentialsError() from e

        user = await self.user_service.authenticate(email, request.password)
        token = self.jwt_service.create_token(str(user.id), user.name.root)

        return AuthResponse(
            user_id=str(user.id),
            name=user.name.root,
            email=user.email.root,
            token=token,
        )
