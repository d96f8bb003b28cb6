"""Password hashing domain service."""

import logfire

from quill.config import AuthSettings
from quill.util.password import hash_password, verify_password

from .base import Service


class PasswordService(Service):
    """Domain service wrapping bcrypt hashing."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize password service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def hash(self, password: str) -> str:
        """Hash a plaintext password."""
        with logfire.span(
            "password_service.hash", rounds=self.auth_settings.bcrypt_rounds
        ):
            return hash_password(password, self.auth_settings)

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash."""
        with logfire.span("password_service.verify"):
            return verify_password(password, password_hash)
