"""Post domain service."""

import logfire
from datetime import datetime
from uuid import uuid4

from quill.domain.error import NotFoundError, ValidationError
from quill.domain.model.post import Post
from quill.domain.model.user import User
from quill.domain.repository import PostRepository
from quill.domain.value import PostId

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(self, author: User, title: str, content: str) -> Post:
        """Create a post authored by ``author``.

        Args:
            author: Authenticated author
            title: Post title
            content: Rich-text (HTML) body

        Returns:
            Saved post

        Raises:
            ValidationError: If title or content is blank
        """
        with logfire.span(
            "post_service.create_post", author_id=str(author.id), title=title
        ):
            if not title.strip() or not content.strip():
                raise ValidationError("Title and content are required")

            now = datetime.now()
            post = Post(
                id=PostId(uuid4()),
                title=title.strip(),
                content=content,
                author_id=author.id,
                author_name=author.name.root,
                like_count=0,
                created_at=now,
                updated_at=now,
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def get_required(self, post_id: PostId) -> Post:
        """Get a post by ID or raise.

        This is the post lookup the comment gate relies on.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", str(post_id))
        return post

    async def list_posts(self, limit: int = 30, offset: int = 0) -> tuple[list[Post], int]:
        """List posts, newest first.

        Args:
            limit: Page size
            offset: Number of posts to skip

        Returns:
            Tuple of (page of posts, total number of posts)
        """
        with logfire.span("post_service.list_posts", limit=limit, offset=offset):
            total = await self.post_repository.count()
            posts = await self.post_repository.find_all(limit=limit, offset=offset)
            logfire.info("Posts listed", count=len(posts), total=total)
            return posts, total

    async def update_content(
        self,
        post_id: PostId,
        title: str | None = None,
        content: str | None = None,
    ) -> Post:
        """Update the title and/or content of a post.

        Args:
            post_id: Post ID
            title: New title (None leaves it unchanged)
            content: New content (None leaves it unchanged)

        Returns:
            Updated post

        Raises:
            ValidationError: If a provided field is blank or nothing is provided
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("post_service.update_content", post_id=str(post_id)):
            if title is None and content is None:
                raise ValidationError("Nothing to update")
            if (title is not None and not title.strip()) or (
                content is not None and not content.strip()
            ):
                raise ValidationError("Title and content cannot be blank")

            updated = await self.post_repository.update_content(
                post_id,
                title=title.strip() if title is not None else None,
                content=content,
            )
            if updated is None:
                logfire.warn("Post not found for update", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))

            logfire.info("Post updated", post_id=str(post_id))
            return updated

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post record.

        Comments and likes are removed by the caller first.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("post_service.delete_post", post_id=str(post_id)):
            if not await self.post_repository.delete(post_id):
                raise NotFoundError("Post", str(post_id))
            logfire.info("Post deleted", post_id=str(post_id))

    async def increment_likes(self, post_id: PostId) -> None:
        """Atomically increment a post's like count.

        Args:
            post_id: Post ID
        """
        with logfire.span("post_service.increment_likes", post_id=str(post_id)):
            await self.post_repository.increment_likes(post_id)

    async def decrement_likes(self, post_id: PostId) -> None:
        """Atomically decrement a post's like count (minimum 0).

        Args:
            post_id: Post ID
        """
        with logfire.span("post_service.decrement_likes", post_id=str(post_id)):
            await self.post_repository.decrement_likes(post_id)
