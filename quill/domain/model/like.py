"""Like entity.

A like is one user's endorsement of one post. A user can like a given
post at most once.
"""

from datetime import datetime

from pydantic import Field

from quill.domain.model.common import DomainModel
from quill.domain.value import LikeId, PostId, UserId


class Like(DomainModel):
    """Like on a post."""

    id: LikeId
    user_id: UserId
    post_id: PostId
    created_at: datetime = Field(default_factory=datetime.now)
