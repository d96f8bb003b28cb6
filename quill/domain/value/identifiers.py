"""Strongly typed identifiers for Quill domain entities.

Using NewType keeps post, comment and user ids from being mixed up
while staying plain UUIDs at runtime.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
LikeId = NewType("LikeId", UUID)
