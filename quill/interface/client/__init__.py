"""Async client for the Quill API and its comment thread view."""

from .api import QuillClient
from .render import CommentView, format_comment_thread, render_comment_forest
from .session import ClientSession, SessionUser
from .thread import CommentThread, Notification

__all__ = [
    "ClientSession",
    "CommentThread",
    "CommentView",
    "Notification",
    "QuillClient",
    "SessionUser",
    "format_comment_thread",
    "render_comment_forest",
]
