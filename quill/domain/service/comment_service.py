"""Comment domain service."""

import logfire
from datetime import datetime
from uuid import uuid4

from quill.domain.error import NotFoundError, ValidationError
from quill.domain.model.comment import Comment
from quill.domain.repository import CommentRepository
from quill.domain.value import CommentId, PostId, UserId

from .base import Service
from .comment_tree import CommentNode, build_comment_tree


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        author_name: str,
        text: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            author_name: Author display name
            text: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If text is blank or the parent is missing or
                belongs to another post
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            if not text or not text.strip():
                raise ValidationError("Comment text is required")

            # A reply must point at an existing comment of the same post, so
            # the parent graph can never contain a cycle
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment not found")
                if parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")

            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                author_name=author_name,
                text=text,
                parent_id=parent_id,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            return saved

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get all comments for a post, oldest first.

        Args:
            post_id: Post ID

        Returns:
            Flat list of comments ordered by created_at ascending
        """
        with logfire.span(
            "comment_service.get_comments_for_post", post_id=str(post_id)
        ):
            comments = await self.comment_repository.find_by_post(post_id)
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def get_comment_tree(self, post_id: PostId) -> list[CommentNode]:
        """Get the comments of a post nested into a reply forest.

        Args:
            post_id: Post ID

        Returns:
            Top-level comment nodes with replies populated
        """
        comments = await self.get_comments_for_post(post_id)
        with logfire.span(
            "comment_service.get_comment_tree",
            post_id=str(post_id),
            count=len(comments),
        ):
            return build_comment_tree(comments)

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_required(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID or raise.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def update_text(self, comment_id: CommentId, text: str) -> Comment:
        """Update the text content of a comment.

        Args:
            comment_id: Comment ID
            text: New text content

        Returns:
            Updated comment

        Raises:
            ValidationError: If text is blank
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span(
            "comment_service.update_text",
            comment_id=str(comment_id),
            text_length=len(text),
        ):
            if not text.strip():
                raise ValidationError("Comment text is required")

            updated = await self.comment_repository.update_text(comment_id, text)
            if updated is None:
                logfire.warn(
                    "Comment not found for text update", comment_id=str(comment_id)
                )
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment text updated",
                comment_id=str(comment_id),
                post_id=str(updated.post_id),
                text_length=len(updated.text),
            )
            return updated

    async def delete_comment(self, comment_id: CommentId) -> int:
        """Delete a comment together with every reply beneath it.

        Descendants are removed depth-first before their ancestors, so no
        step ever refers to an already deleted parent. Store failures
        propagate unchanged; whatever was removed before the failure stays
        removed unless the surrounding transaction rolls back.

        Args:
            comment_id: Comment ID

        Returns:
            Number of comments removed (target included)

        Raises:
            NotFoundError: If the comment doesn't exist (nothing is deleted)
            StoreError: If the store fails part way through
        """
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found for delete", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            removed = await self._delete_subtree(comment.id)
            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                post_id=str(comment.post_id),
                removed=removed,
            )
            return removed

    async def _delete_subtree(self, comment_id: CommentId) -> int:
        # Every descendant is discovered after its ancestor, so deleting in
        # reverse discovery order removes children before their parents.
        discovered: list[CommentId] = []
        stack = [comment_id]
        while stack:
            current = stack.pop()
            discovered.append(current)
            children = await self.comment_repository.find_children(current)
            stack.extend(child.id for child in children)

        removed = 0
        for doomed_id in reversed(discovered):
            if await self.comment_repository.delete(doomed_id):
                removed += 1
        return removed

    async def delete_comments_for_post(self, post_id: PostId) -> int:
        """Delete every comment of a post.

        Args:
            post_id: Post ID

        Returns:
            Number of comments removed
        """
        with logfire.span(
            "comment_service.delete_comments_for_post", post_id=str(post_id)
        ):
            removed = await self.comment_repository.delete_by_post(post_id)
            logfire.info("Post comments deleted", post_id=str(post_id), removed=removed)
            return removed
