"""Comment reply tree.

Comments are stored flat, each pointing at its parent through
``parent_id``. This module turns that flat list into a forest of
``CommentNode`` objects and back.

Both directions are iterative so that very deep reply chains never hit
the interpreter's recursion limit.
"""

from dataclasses import dataclass, field
from typing import Iterable

from quill.domain.model.comment import Comment
from quill.domain.value import CommentId


@dataclass(eq=False)
class CommentNode:
    """Node in a comment reply tree.

    Represents a comment and its direct replies, oldest first.
    """

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)

    @property
    def id(self) -> CommentId:
        return self.comment.id


def _sort_key(node: CommentNode):
    return node.comment.created_at


def _reachable(roots: Iterable[CommentNode]) -> set[CommentId]:
    seen: set[CommentId] = set()
    stack = list(roots)
    while stack:
        node = stack.pop()
        seen.add(node.id)
        stack.extend(node.replies)
    return seen


def build_comment_tree(comments: Iterable[Comment]) -> list[CommentNode]:
    """Build the reply forest for one post.

    Algorithm:
    1. Map every comment id to a fresh node with no replies
    2. Attach each node to its parent's replies; comments without a parent,
       or whose parent is not in the input, become top-level nodes
    3. Stable-sort the top level and every replies list by created_at

    A dangling ``parent_id`` is not an error: the comment is shown at top
    level rather than dropped. Every input comment appears exactly once.

    Args:
        comments: Flat comments of a single post, ideally oldest first

    Returns:
        Top-level nodes with replies populated at every level
    """
    ordered = list(comments)
    nodes: dict[CommentId, CommentNode] = {
        comment.id: CommentNode(comment=comment) for comment in ordered
    }

    roots: list[CommentNode] = []
    for comment in ordered:
        node = nodes[comment.id]
        parent = nodes.get(comment.parent_id) if comment.parent_id else None
        # A node can't be its own parent; treat it like an orphan
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.replies.append(node)

    seen = _reachable(roots)
    if len(seen) < len(nodes):
        # parent_id cycles leave nodes unreachable; break each at its first member
        for comment in ordered:
            if comment.id in seen:
                continue
            node = nodes[comment.id]
            parent = nodes[comment.parent_id]
            parent.replies = [n for n in parent.replies if n is not node]
            roots.append(node)
            seen |= _reachable([node])

    # list.sort is stable, so equal timestamps keep input order
    roots.sort(key=_sort_key)
    stack = list(roots)
    while stack:
        node = stack.pop()
        node.replies.sort(key=_sort_key)
        stack.extend(node.replies)

    return roots


def flatten_comment_tree(forest: Iterable[CommentNode]) -> list[Comment]:
    """Return the comments of a forest in pre-order.

    Parents come before their replies and siblings keep their order, which
    is the order a threaded view displays them in.

    Args:
        forest: Top-level nodes

    Returns:
        Flat list of comments
    """
    result: list[Comment] = []
    stack = list(reversed(list(forest)))
    while stack:
        node = stack.pop()
        result.append(node.comment)
        stack.extend(reversed(node.replies))
    return result
