"""Comment entity.

Comments belong to a post and may reply to another comment of the same
post, forming a reply tree of unlimited depth. Only ``parent_id`` is
stored; the tree is rebuilt from the flat list whenever it is needed.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from quill.domain.model.common import DomainModel
from quill.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    ``post_id``, ``author_id``, ``parent_id`` and ``created_at`` never change
    after creation. ``text`` is edited in place by the author.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_name: str = Field(min_length=1, max_length=100)
    text: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None
