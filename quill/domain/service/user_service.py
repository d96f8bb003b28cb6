"""User domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from quill.domain.error import (
    BusinessRuleViolationError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from quill.domain.model import User
from quill.domain.repository import UserRepository
from quill.domain.value import DisplayName, Email, UserId

from .base import Service
from .password_service import PasswordService

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes and newer releases reject more
MAX_PASSWORD_BYTES = 72


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordService,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            password_service: Password hashing service
        """
        self.user_repository = user_repository
        self.password_service = password_service

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def register(self, name: DisplayName, email: Email, password: str) -> User:
        """Register a new user.

        Args:
            name: Display name
            email: Email address (must be unused)
            password: Plaintext password

        Returns:
            Created user

        Raises:
            ValidationError: If the password is too short or too long
            BusinessRuleViolationError: If the email is already registered
        """
        with logfire.span("user_service.register", email=email.root):
            if len(password) < MIN_PASSWORD_LENGTH:
                raise ValidationError(
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
                )
            if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
                raise ValidationError("Password is too long")

            if await self.user_repository.find_by_email(email):
                logfire.warn("Email already registered", email=email.root)
                raise BusinessRuleViolationError("Email is already registered")

            now = datetime.now()
            user = User(
                id=UserId(uuid4()),
                name=name,
                email=email,
                password_hash=self.password_service.hash(password),
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            logfire.info("User registered", user_id=str(saved.id))
            return saved

    async def authenticate(self, email: Email, password: str) -> User:
        """Check an email/password pair.

        Unknown email and wrong password produce the same error.

        Raises:
            InvalidCredentialsError: If the credentials don't match a user
        """
        with logfire.span("user_service.authenticate", email=email.root):
            user = await self.user_repository.find_by_email(email)
            if user is None or not self.password_service.verify(
                password, user.password_hash
            ):
                logfire.warn("Login rejected", email=email.root)
                raise InvalidCredentialsError()
            logfire.info("User authenticated", user_id=str(user.id))
            return user
