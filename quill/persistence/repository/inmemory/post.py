"""In-memory post repository for testing."""

from datetime import datetime
from typing import Any, Optional

from quill.domain.model.post import Post
from quill.domain.repository.post import PostRepository
from quill.domain.value import PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_all(self, limit: int = 30, offset: int = 0) -> list[Post]:
        """Find posts, newest first."""
        posts = sorted(self._posts.values(), key=lambda p: p.created_at, reverse=True)
        return posts[offset : offset + limit]

    async def count(self) -> int:
        """Count all posts."""
        return len(self._posts)

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        self._posts[post.id] = post
        return post

    async def update_content(
        self,
        post_id: PostId,
        title: str | None = None,
        content: str | None = None,
    ) -> Optional[Post]:
        """Update the title and/or content of a post."""
        post = self._posts.get(post_id)
        if post is None:
            return None

        changes: dict[str, Any] = {"updated_at": datetime.now()}
        if title is not None:
            changes["title"] = title
        if content is not None:
            changes["content"] = content

        updated = post.model_copy(update=changes)
        self._posts[post_id] = updated
        return updated

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post."""
        return self._posts.pop(post_id, None) is not None

    async def increment_likes(self, post_id: PostId) -> None:
        """Atomically increment like_count by 1."""
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(
                update={"like_count": post.like_count + 1}
            )

    async def decrement_likes(self, post_id: PostId) -> None:
        """Atomically decrement like_count by 1 (minimum 0)."""
        post = self._posts.get(post_id)
        if post and post.like_count > 0:
            self._posts[post_id] = post.model_copy(
                update={"like_count": post.like_count - 1}
            )
