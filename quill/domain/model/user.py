"""User aggregate root."""

from datetime import datetime

from pydantic import Field

from quill.domain.model.common import DomainModel
from quill.domain.value import DisplayName, Email, UserId


class User(DomainModel):
    """Registered user.

    Authenticates with email and password; only the bcrypt hash is kept.
    """

    id: UserId
    name: DisplayName
    email: Email
    password_hash: str = Field(repr=False)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
