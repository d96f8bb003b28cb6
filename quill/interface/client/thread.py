"""Comment thread of one post, kept in sync with the server."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, Literal
from uuid import UUID

import httpx
import logfire

from quill.domain.service.comment_tree import CommentNode, build_comment_tree
from quill.domain.value import CommentId, PostId, UserId
from quill.interface.error import ApiError

from .api import QuillClient
from .render import CommentView, format_comment_thread, render_comment_forest
from .session import ClientSession


@dataclass(frozen=True)
class Notification:
    """Message for the user that doesn't interrupt what they're doing."""

    message: str
    level: Literal["info", "error"] = "error"
    status_code: int | None = None
    created_at: datetime = field(default_factory=datetime.now)


class CommentThread:
    """Displays and edits the comments of a post.

    Every mutation performs exactly one write and then reloads the whole
    thread from the server, so the view never drifts from the store. When
    a call fails, the previous view stays in place and a ``Notification``
    is queued instead.
    """

    def __init__(
        self,
        client: QuillClient,
        session: ClientSession,
        post_id: PostId,
        post_author_id: UserId | None,
    ) -> None:
        """Initialize the thread.

        Args:
            client: API client
            session: Session of the viewing user (read only)
            post_id: Post whose comments are shown
            post_author_id: Author of that post, for moderation controls
        """
        self.client = client
        self.session = session
        self.post_id = post_id
        self.post_author_id = post_author_id
        self.forest: list[CommentNode] = []
        self.views: list[CommentView] = []
        self.notifications: list[Notification] = []

    @classmethod
    async def open(
        cls, client: QuillClient, session: ClientSession, post_id: PostId
    ) -> "CommentThread":
        """Load a post's author and its comments.

        Raises:
            ApiError: If the post can't be loaded
        """
        post = await client.get_post(post_id)
        thread = cls(client, session, post_id, UserId(UUID(post.author.id)))
        await thread.refresh()
        return thread

    async def refresh(self) -> bool:
        """Reload the comments and rebuild the views.

        Returns:
            True if the thread now reflects the server
        """
        with logfire.span("comment_thread.refresh", post_id=str(self.post_id)):
            try:
                comments = await self.client.list_comments(self.post_id)
            except (ApiError, httpx.HTTPError) as e:
                self._notify("Could not load comments", e)
                return False

            self.forest = build_comment_tree(comments)
            self.rerender()
            return True

    def rerender(self) -> None:
        """Recompute the views, e.g. after the session changed."""
        self.views = render_comment_forest(
            self.forest, self.session.user_id, self.post_author_id
        )

    async def add_comment(self, text: str) -> bool:
        """Post a top-level comment."""
        if not text.strip():
            self._notify_info("Comment text is required")
            return False
        return await self._mutate(
            "Could not post comment",
            lambda: self.client.create_comment(self.post_id, text),
        )

    async def reply(self, parent_id: CommentId, text: str) -> bool:
        """Reply to a comment of this thread."""
        if not text.strip():
            self._notify_info("Reply text is required")
            return False
        return await self._mutate(
            "Could not post reply",
            lambda: self.client.create_comment(self.post_id, text, parent_id),
        )

    async def edit(self, comment_id: CommentId, text: str) -> bool:
        """Replace a comment's text."""
        if not text.strip():
            self._notify_info("Comment text is required")
            return False
        return await self._mutate(
            "Could not save changes",
            lambda: self.client.update_comment(comment_id, text),
        )

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment and, server side, every reply beneath it."""
        return await self._mutate(
            "Could not delete comment",
            lambda: self.client.delete_comment(comment_id),
        )

    def render(self) -> str:
        return format_comment_thread(self.views)

    async def _mutate(self, failure: str, write: Callable[[], Awaitable[object]]) -> bool:
        try:
            await write()
        except (ApiError, httpx.HTTPError) as e:
            self._notify(failure, e)
            return False
        return await self.refresh()

    def _notify(self, failure: str, error: Exception) -> None:
        status_code = error.status_code if isinstance(error, ApiError) else None
        detail = error.detail if isinstance(error, ApiError) else str(error)
        logfire.warn(
            failure,
            post_id=str(self.post_id),
            status_code=status_code,
            error=detail,
        )
        self.notifications.append(
            Notification(message=f"{failure}: {detail}", status_code=status_code)
        )

    def _notify_info(self, message: str) -> None:
        self.notifications.append(Notification(message=message, level="info"))
