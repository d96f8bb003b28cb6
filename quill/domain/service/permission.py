"""Who may do what to a comment or post.

The predicates are shared by the server, which enforces them, and by the
client renderer, which only uses them to decide which controls to show.
"""

from quill.domain.error import ForbiddenError, NotAuthenticatedError
from quill.domain.model.comment import Comment
from quill.domain.model.post import Post
from quill.domain.value import UserId


def can_reply(actor_id: UserId | None) -> bool:
    """Any authenticated user may comment or reply."""
    return actor_id is not None


def can_edit_comment(actor_id: UserId | None, comment: Comment) -> bool:
    """Only the comment's author may edit it."""
    return actor_id is not None and actor_id == comment.author_id


def can_delete_comment(
    actor_id: UserId | None, comment: Comment, post_author_id: UserId | None
) -> bool:
    """The comment's author or the post's author may delete a comment.

    The post author moderates every comment on their post, replies from
    other users included. ``post_author_id`` is None when the post is gone.
    """
    if actor_id is None:
        return False
    return actor_id == comment.author_id or actor_id == post_author_id


def can_modify_post(actor_id: UserId | None, post: Post) -> bool:
    """Only the post's author may edit or delete it."""
    return actor_id is not None and actor_id == post.author_id


def ensure_authenticated(actor_id: UserId | None, action: str) -> UserId:
    """Return the actor id or raise NotAuthenticatedError.

    Args:
        actor_id: Resolved user id, None when anonymous
        action: Human-readable action for the error message

    Returns:
        The non-None actor id
    """
    if actor_id is None:
        raise NotAuthenticatedError(action)
    return actor_id


def ensure_can_edit_comment(actor_id: UserId | None, comment: Comment) -> UserId:
    """Raise unless the actor may edit the comment."""
    actor = ensure_authenticated(actor_id, "edit comments")
    if not can_edit_comment(actor, comment):
        raise ForbiddenError("edit", "comment", str(comment.id), str(actor))
    return actor


def ensure_can_delete_comment(
    actor_id: UserId | None, comment: Comment, post_author_id: UserId | None
) -> UserId:
    """Raise unless the actor may delete the comment."""
    actor = ensure_authenticated(actor_id, "delete comments")
    if not can_delete_comment(actor, comment, post_author_id):
        raise ForbiddenError("delete", "comment", str(comment.id), str(actor))
    return actor


def ensure_can_modify_post(actor_id: UserId | None, post: Post, action: str) -> UserId:
    """Raise unless the actor is the post's author."""
    actor = ensure_authenticated(actor_id, f"{action} posts")
    if not can_modify_post(actor, post):
        raise ForbiddenError(action, "post", str(post.id), str(actor))
    return actor
