"""Unit tests for the comment and post authorization rules."""

from uuid import uuid4

import pytest

from quill.domain.error import ForbiddenError, NotAuthenticatedError
from quill.domain.service.permission import (
    can_delete_comment,
    can_edit_comment,
    can_modify_post,
    can_reply,
    ensure_authenticated,
    ensure_can_delete_comment,
    ensure_can_edit_comment,
    ensure_can_modify_post,
)
from quill.domain.value import PostId, UserId
from tests.conftest import make_comment, make_post


class TestCommentPermissions:
    """Tests for who may reply to, edit and delete comments."""

    def setup_method(self):
        self.commenter = UserId(uuid4())
        self.post_author = UserId(uuid4())
        self.stranger = UserId(uuid4())
        self.comment = make_comment(PostId(uuid4()), author_id=self.commenter)

    def test_anyone_signed_in_may_reply(self):
        assert can_reply(self.stranger)
        assert not can_reply(None)

    def test_only_commenter_may_edit(self):
        """The post author moderates but does not edit others' words."""
        assert can_edit_comment(self.commenter, self.comment)
        assert not can_edit_comment(self.post_author, self.comment)
        assert not can_edit_comment(self.stranger, self.comment)
        assert not can_edit_comment(None, self.comment)

    def test_commenter_and_post_author_may_delete(self):
        assert can_delete_comment(self.commenter, self.comment, self.post_author)
        assert can_delete_comment(self.post_author, self.comment, self.post_author)
        assert not can_delete_comment(self.stranger, self.comment, self.post_author)
        assert not can_delete_comment(None, self.comment, self.post_author)

    def test_missing_post_leaves_only_commenter(self):
        """Without a post author only the commenter may delete."""
        assert can_delete_comment(self.commenter, self.comment, None)
        assert not can_delete_comment(self.stranger, self.comment, None)

    def test_ensure_edit_rejects_stranger(self):
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_can_edit_comment(self.stranger, self.comment)

        assert exc_info.value.action == "edit"
        assert exc_info.value.resource == "comment"

    def test_ensure_delete_requires_authentication(self):
        with pytest.raises(NotAuthenticatedError):
            ensure_can_delete_comment(None, self.comment, self.post_author)

    def test_ensure_delete_returns_actor(self):
        actor = ensure_can_delete_comment(self.post_author, self.comment, self.post_author)
        assert actor == self.post_author


class TestPostPermissions:
    """Tests for post ownership checks."""

    def test_only_author_may_modify_post(self):
        author = UserId(uuid4())
        post = make_post(author_id=author)

        assert can_modify_post(author, post)
        assert not can_modify_post(UserId(uuid4()), post)
        assert not can_modify_post(None, post)

    def test_ensure_modify_post_names_the_action(self):
        post = make_post()

        with pytest.raises(ForbiddenError) as exc_info:
            ensure_can_modify_post(UserId(uuid4()), post, "delete")

        assert exc_info.value.action == "delete"
        assert exc_info.value.resource == "post"

    def test_ensure_authenticated_message(self):
        with pytest.raises(NotAuthenticatedError, match="create comments"):
            ensure_authenticated(None, "create comments")
