"""Turn a comment forest into what a viewer sees.

Each node becomes a ``CommentView`` carrying its nesting depth and the
controls the viewer is offered. The controls use the same predicates the
server enforces, but they are only a convenience: the server has the final
say on every write.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from quill.domain.service.comment_tree import CommentNode
from quill.domain.service.permission import (
    can_delete_comment,
    can_edit_comment,
    can_reply,
)
from quill.domain.value import CommentId, UserId

INDENT = "    "


@dataclass
class CommentView:
    """A comment prepared for display to one viewer."""

    id: CommentId
    author_id: UserId
    author_name: str
    text: str
    created_at: datetime
    updated_at: datetime
    depth: int
    can_reply: bool
    can_edit: bool
    can_delete: bool
    replies: list["CommentView"] = field(default_factory=list)

    @property
    def edited(self) -> bool:
        return self.updated_at > self.created_at

    @property
    def actions(self) -> list[str]:
        flags = (
            ("reply", self.can_reply),
            ("edit", self.can_edit),
            ("delete", self.can_delete),
        )
        return [name for name, allowed in flags if allowed]


def render_comment_forest(
    forest: Iterable[CommentNode],
    viewer_id: UserId | None,
    post_author_id: UserId | None,
) -> list[CommentView]:
    """Build the view tree for ``viewer_id``.

    Works at any depth; the walk uses an explicit stack.

    Args:
        forest: Top-level comment nodes, replies populated
        viewer_id: Signed-in user, None when anonymous
        post_author_id: Author of the post the comments belong to

    Returns:
        Top-level views, mirroring the forest's shape and order
    """
    roots: list[CommentView] = []
    # (node, depth, list the node's view is appended to)
    stack: list[tuple[CommentNode, int, list[CommentView]]] = [
        (node, 0, roots) for node in reversed(list(forest))
    ]
    while stack:
        node, depth, siblings = stack.pop()
        comment = node.comment
        view = CommentView(
            id=comment.id,
            author_id=comment.author_id,
            author_name=comment.author_name,
            text=comment.text,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            depth=depth,
            can_reply=can_reply(viewer_id),
            can_edit=can_edit_comment(viewer_id, comment),
            can_delete=can_delete_comment(viewer_id, comment, post_author_id),
        )
        siblings.append(view)
        stack.extend((reply, depth + 1, view.replies) for reply in reversed(node.replies))
    return roots


def format_comment_thread(views: Iterable[CommentView]) -> str:
    """Plain-text rendering of a view tree, replies indented under parents."""
    blocks: list[str] = []
    stack = list(reversed(list(views)))
    while stack:
        view = stack.pop()
        pad = INDENT * view.depth
        header = f"{view.author_name} on {view.created_at:%Y-%m-%d %H:%M}"
        if view.edited:
            header += " (edited)"
        lines = [pad + header]
        lines.extend(pad + line for line in view.text.splitlines() or [""])
        if view.actions:
            lines.append(pad + " ".join(f"[{action}]" for action in view.actions))
        blocks.append("\n".join(lines))
        stack.extend(reversed(view.replies))
    return "\n\n".join(blocks)
