"""Register use case."""

from pydantic import BaseModel

from quill.domain.error import ValidationError
from quill.domain.service import JWTService, UserService
from quill.domain.value import DisplayName, Email


class RegisterRequest(BaseModel):
    """Register request."""

    name: str
    email: str
    password: str


class AuthResponse(BaseModel):
    """Response shared by register and login."""

    user_id: str
    name: str
    email: str
    token: str


class RegisterUseCase:
    """Use case for creating an account and signing the user in."""

    def __init__(self, user_service: UserService, jwt_service: JWTService) -> None:
        """Initialize register use case.

        Args:
            user_service: User domain service
            jwt_service: JWT token domain service
        """
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: RegisterRequest) -> AuthResponse:
        """Execute register flow.

        Raises:
            ValidationError: If name, email or password are invalid
            BusinessRuleViolationError: If the email is already registered
        """
        try:
            name = DisplayName(request.name)
            email = Email(request.email)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        user = await self.user_service.register(name, email, request.password)
        token = self.jwt_service.create_token(str(user.id), user.name.root)

        return AuthResponse(
            user_id=str(user.id),
            name=user.name.root,
            email=user.email.root,
            token=token,
        )
