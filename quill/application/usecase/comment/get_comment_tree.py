"""Get comment tree use case."""

from uuid import UUID

from pydantic import BaseModel

from quill.domain.error import ThreadTooDeepError
from quill.domain.service import (
    CommentNode,
    CommentService,
    PostService,
    flatten_comment_tree,
)
from quill.domain.value import PostId

from .get_comments import CommentItem

# FastAPI validates and serializes nested responses recursively; deeper
# threads are refused and must be read from the flat list.
MAX_NESTED_DEPTH = 100


class CommentNodeResponse(CommentItem):
    """Comment with its nested replies.

    Recursive structure mirroring the domain reply tree.
    """

    replies: list["CommentNodeResponse"]

    @classmethod
    def from_forest(cls, forest: list[CommentNode]) -> list["CommentNodeResponse"]:
        """Convert a domain forest to response models, children first.

        Args:
            forest: Top-level domain comment nodes

        Returns:
            Response models in the same order as ``forest``
        """
        built: dict[int, CommentNodeResponse] = {}
        stack: list[tuple[CommentNode, bool]] = [(node, False) for node in forest]
        while stack:
            node, expanded = stack.pop()
            if not expanded:
                stack.append((node, True))
                stack.extend((child, False) for child in node.replies)
                continue
            item = CommentItem.from_domain(node.comment)
            built[id(node)] = cls(
                **item.model_dump(),
                replies=[built[id(child)] for child in node.replies],
            )
        return [built[id(node)] for node in forest]


def _forest_depth(forest: list[CommentNode]) -> int:
    """Number of levels in the forest; top-level comments are level 1."""
    deepest = 0
    stack = [(node, 1) for node in forest]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in node.replies)
    return deepest


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    post_id: str  # UUID string


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response."""

    post_id: str
    comments: list[CommentNodeResponse]
    total: int


class GetCommentTreeUseCase:
    """Use case for getting a post's comments already nested into threads."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
    ) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Raises:
            NotFoundError: If the post doesn't exist
            ThreadTooDeepError: If replies nest deeper than MAX_NESTED_DEPTH
        """
        post_id = PostId(UUID(request.post_id))
        await self.post_service.get_required(post_id)

        forest = await self.comment_service.get_comment_tree(post_id)

        depth = _forest_depth(forest)
        if depth > MAX_NESTED_DEPTH:
            raise ThreadTooDeepError(request.post_id, depth, MAX_NESTED_DEPTH)

        return GetCommentTreeResponse(
            post_id=request.post_id,
            comments=CommentNodeResponse.from_forest(forest),
            total=len(flatten_comment_tree(forest)),
        )
