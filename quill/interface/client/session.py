"""Client-side login session."""

from typing import TYPE_CHECKING
from uuid import UUID

import logfire
from pydantic import BaseModel

from quill.domain.value import UserId

if TYPE_CHECKING:
    from .api import QuillClient


class SessionUser(BaseModel):
    """The signed-in user as seen by a client."""

    user_id: str
    name: str
    email: str
    token: str


class ClientSession:
    """Holds who is signed in on this client.

    Only ``login``, ``register`` and ``logout`` change the session; every
    other component just reads it.
    """

    def __init__(self) -> None:
        self._user: SessionUser | None = None

    @property
    def current_user(self) -> SessionUser | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def token(self) -> str | None:
        return self._user.token if self._user else None

    @property
    def user_id(self) -> UserId | None:
        return UserId(UUID(self._user.user_id)) if self._user else None

    async def register(
        self, client: "QuillClient", name: str, email: str, password: str
    ) -> SessionUser:
        """Create an account and sign in as it.

        Raises:
            ApiError: If the server rejects the registration
        """
        auth = await client.register(name, email, password)
        self._user = SessionUser(**auth.model_dump())
        logfire.info("Client session started", user_id=self._user.user_id)
        return self._user

    async def login(self, client: "QuillClient", email: str, password: str) -> SessionUser:
        """Sign in with email and password.

        Raises:
            ApiError: If the credentials are rejected
        """
        auth = await client.login(email, password)
        self._user = SessionUser(**auth.model_dump())
        logfire.info("Client session started", user_id=self._user.user_id)
        return self._user

    async def logout(self, client: "QuillClient") -> None:
        """Sign out. The local session is cleared even if the server call fails."""
        try:
            await client.logout()
        finally:
            self._user = None
            logfire.info("Client session ended")
