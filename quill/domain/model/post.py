"""Post aggregate root."""

from datetime import datetime

from pydantic import Field

from quill.domain.model.common import DomainModel
from quill.domain.value import PostId, UserId


class Post(DomainModel):
    """Post aggregate root.

    ``content`` is rich text (HTML) produced by the editor and stored as-is.
    ``author_name`` is denormalised so listings need no user lookup.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=100000)
    author_id: UserId
    author_name: str = Field(min_length=1, max_length=100)
    like_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
