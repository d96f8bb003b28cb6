"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from quill.domain.error import NotFoundError, StoreError, ValidationError
from quill.domain.repository import CommentRepository
from quill.domain.service import CommentService
from quill.domain.value import CommentId, PostId, UserId
from quill.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class RecordingCommentRepository(InMemoryCommentRepository):
    """Remembers the order comments were deleted in."""

    def __init__(self) -> None:
        super().__init__()
        self.deleted: list[CommentId] = []

    async def delete(self, comment_id: CommentId) -> bool:
        self.deleted.append(comment_id)
        return await super().delete(comment_id)


class FlakyCommentRepository(InMemoryCommentRepository):
    """Fails the delete after ``fail_after`` successful ones."""

    def __init__(self, fail_after: int) -> None:
        super().__init__()
        self.fail_after = fail_after

    async def delete(self, comment_id: CommentId) -> bool:
        if self.fail_after == 0:
            raise StoreError("comment.delete", "connection reset")
        self.fail_after -= 1
        return await super().delete(comment_id)


async def _seed_chain(repo: CommentRepository, post_id: PostId, length: int):
    """Save a reply chain c0 <- c1 <- ... and return it."""
    chain = []
    parent_id = None
    for i in range(length):
        comment = make_comment(post_id, parent_id=parent_id, minutes=i)
        await repo.save(comment)
        chain.append(comment)
        parent_id = comment.id
    return chain


class TestCreateComment:
    """Tests for CommentService.create_comment."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        author_id = UserId(uuid4())

        # Act
        comment = await comment_service.create_comment(
            post_id=post_id, author_id=author_id, author_name="Alice", text="First!"
        )

        # Assert
        assert comment.parent_id is None
        assert comment.is_top_level
        assert comment.created_at == comment.updated_at
        stored = await comment_service.get_comments_for_post(post_id)
        assert [c.id for c in stored] == [comment.id]

    @pytest.mark.asyncio
    async def test_reply_points_at_parent(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        parent = await comment_service.create_comment(
            post_id=post_id, author_id=UserId(uuid4()), author_name="Alice", text="Q?"
        )

        # Act
        reply = await comment_service.create_comment(
            post_id=post_id,
            author_id=UserId(uuid4()),
            author_name="Bob",
            text="A.",
            parent_id=parent.id,
        )

        # Assert
        assert reply.parent_id == parent.id
        tree = await comment_service.get_comment_tree(post_id)
        assert [n.id for n in tree] == [parent.id]
        assert [n.id for n in tree[0].replies] == [reply.id]

    @pytest.mark.asyncio
    async def test_blank_text_is_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                post_id=PostId(uuid4()),
                author_id=UserId(uuid4()),
                author_name="Alice",
                text="   ",
            )

    @pytest.mark.asyncio
    async def test_missing_parent_is_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError, match="Parent comment not found"):
            await comment_service.create_comment(
                post_id=PostId(uuid4()),
                author_id=UserId(uuid4()),
                author_name="Alice",
                text="Reply",
                parent_id=CommentId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_parent_from_other_post_is_rejected(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        other = await comment_service.create_comment(
            post_id=PostId(uuid4()),
            author_id=UserId(uuid4()),
            author_name="Alice",
            text="Elsewhere",
        )

        # Act & Assert
        with pytest.raises(ValidationError, match="does not belong"):
            await comment_service.create_comment(
                post_id=PostId(uuid4()),
                author_id=UserId(uuid4()),
                author_name="Bob",
                text="Reply",
                parent_id=other.id,
            )


class TestUpdateText:
    """Tests for CommentService.update_text."""

    @pytest.mark.asyncio
    async def test_update_changes_text_and_timestamp(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        comment = make_comment(PostId(uuid4()), text="Old")
        await repo.save(comment)

        # Act
        updated = await comment_service.update_text(comment.id, "New")

        # Assert
        assert updated.text == "New"
        assert updated.created_at == comment.created_at
        assert updated.updated_at > comment.updated_at
        assert updated.parent_id == comment.parent_id

    @pytest.mark.asyncio
    async def test_update_missing_comment_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.update_text(CommentId(uuid4()), "New")

    @pytest.mark.asyncio
    async def test_update_blank_text_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError):
            await comment_service.update_text(CommentId(uuid4()), "  ")


class TestDeleteComment:
    """Tests for the cascading CommentService.delete_comment."""

    @pytest.mark.asyncio
    async def test_deletes_whole_subtree(self):
        """Deleting the chain root should remove every descendant."""
        # Arrange
        repo = InMemoryCommentRepository()
        comment_service = CommentService(comment_repository=repo)
        post_id = PostId(uuid4())
        chain = await _seed_chain(repo, post_id, 4)

        # Act
        removed = await comment_service.delete_comment(chain[0].id)

        # Assert
        assert removed == 4
        assert await repo.find_by_post(post_id) == []

    @pytest.mark.asyncio
    async def test_deletion_leaves_siblings_and_ancestors(self):
        """Only the target and its descendants should go."""
        # Arrange
        repo = InMemoryCommentRepository()
        comment_service = CommentService(comment_repository=repo)
        post_id = PostId(uuid4())
        root = make_comment(post_id, minutes=0)
        target = make_comment(post_id, parent_id=root.id, minutes=1)
        sibling = make_comment(post_id, parent_id=root.id, minutes=2)
        grandchild = make_comment(post_id, parent_id=target.id, minutes=3)
        unrelated = make_comment(post_id, minutes=4)
        for comment in (root, target, sibling, grandchild, unrelated):
            await repo.save(comment)

        # Act
        removed = await comment_service.delete_comment(target.id)

        # Assert
        assert removed == 2
        remaining = {c.id for c in await repo.find_by_post(post_id)}
        assert remaining == {root.id, sibling.id, unrelated.id}

    @pytest.mark.asyncio
    async def test_children_are_deleted_before_parents(self):
        # Arrange
        repo = RecordingCommentRepository()
        comment_service = CommentService(comment_repository=repo)
        chain = await _seed_chain(repo, PostId(uuid4()), 4)

        # Act
        await comment_service.delete_comment(chain[0].id)

        # Assert
        assert repo.deleted == [c.id for c in reversed(chain)]

    @pytest.mark.asyncio
    async def test_very_deep_chain_deletes_without_recursion(self):
        """Reply depth far beyond the interpreter's recursion limit."""
        # Arrange
        repo = InMemoryCommentRepository()
        comment_service = CommentService(comment_repository=repo)
        post_id = PostId(uuid4())
        chain = await _seed_chain(repo, post_id, 3000)

        # Act
        removed = await comment_service.delete_comment(chain[0].id)

        # Assert
        assert removed == 3000
        assert await repo.find_by_post(post_id) == []

    @pytest.mark.asyncio
    async def test_every_branch_goes_before_its_parent(self):
        # Arrange
        repo = RecordingCommentRepository()
        comment_service = CommentService(comment_repository=repo)
        post_id = PostId(uuid4())
        root = make_comment(post_id, minutes=0)
        left = make_comment(post_id, parent_id=root.id, minutes=1)
        right = make_comment(post_id, parent_id=root.id, minutes=2)
        leaf = make_comment(post_id, parent_id=left.id, minutes=3)
        for comment in (root, left, right, leaf):
            await repo.save(comment)

        # Act
        removed = await comment_service.delete_comment(root.id)

        # Assert
        assert removed == 4
        assert repo.deleted[-1] == root.id
        assert repo.deleted.index(leaf.id) < repo.deleted.index(left.id)

    @pytest.mark.asyncio
    async def test_second_delete_raises_not_found(self):
        # Arrange
        repo = InMemoryCommentRepository()
        comment_service = CommentService(comment_repository=repo)
        comment = make_comment(PostId(uuid4()))
        await repo.save(comment)
        await comment_service.delete_comment(comment.id)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(comment.id)

    @pytest.mark.asyncio
    async def test_store_failure_propagates_and_keeps_ancestors(self):
        """A failing store should surface; whatever wasn't reached stays."""
        # Arrange
        repo = FlakyCommentRepository(fail_after=10)
        comment_service = CommentService(comment_repository=repo)
        post_id = PostId(uuid4())
        chain = await _seed_chain(repo, post_id, 4)
        repo.fail_after = 2

        # Act
        with pytest.raises(StoreError):
            await comment_service.delete_comment(chain[0].id)

        # Assert
        remaining = [c.id for c in await repo.find_by_post(post_id)]
        assert remaining == [chain[0].id, chain[1].id]


class TestDeleteCommentsForPost:
    """Tests for CommentService.delete_comments_for_post."""

    @pytest.mark.asyncio
    async def test_only_that_posts_comments_are_removed(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        repo = await unit_env.get(CommentRepository)
        doomed_post = PostId(uuid4())
        kept_post = PostId(uuid4())
        await _seed_chain(repo, doomed_post, 3)
        kept = await _seed_chain(repo, kept_post, 2)

        # Act
        removed = await comment_service.delete_comments_for_post(doomed_post)

        # Assert
        assert removed == 3
        assert [c.id for c in await repo.find_by_post(kept_post)] == [c.id for c in kept]
