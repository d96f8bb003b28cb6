"""Test configuration and fixtures."""

import os
from datetime import datetime, timedelta
from uuid import uuid4

import logfire

# Test defaults, applied before any Settings() is created
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")  # bcrypt minimum, keeps tests fast

from quill.domain.model import Comment, Post  # noqa: E402
from quill.domain.value import CommentId, PostId, UserId  # noqa: E402

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def make_comment(
    post_id: PostId,
    parent_id: CommentId | None = None,
    minutes: int = 0,
    author_id: UserId | None = None,
    text: str = "A comment",
    author_name: str = "Alice",
) -> Comment:
    """Helper to build a comment created ``minutes`` after BASE_TIME."""
    created = BASE_TIME + timedelta(minutes=minutes)
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=author_id or UserId(uuid4()),
        author_name=author_name,
        text=text,
        parent_id=parent_id,
        created_at=created,
        updated_at=created,
    )


def make_post(author_id: UserId | None = None, title: str = "Hello") -> Post:
    """Helper to build a post."""
    return Post(
        id=PostId(uuid4()),
        title=title,
        content="<p>Body</p>",
        author_id=author_id or UserId(uuid4()),
        author_name="Bob",
        created_at=BASE_TIME,
        updated_at=BASE_TIME,
    )
