"""Unit tests for rendering comment threads."""

from datetime import timedelta
from uuid import uuid4

from quill.domain.service.comment_tree import build_comment_tree
from quill.domain.value import PostId, UserId
from quill.interface.client.render import (
    INDENT,
    format_comment_thread,
    render_comment_forest,
)
from tests.conftest import make_comment


class TestRenderCommentForest:
    """Tests for render_comment_forest."""

    def setup_method(self):
        self.post_id = PostId(uuid4())
        self.alice = UserId(uuid4())
        self.bob = UserId(uuid4())
        self.post_author = UserId(uuid4())
        self.top = make_comment(self.post_id, author_id=self.alice, minutes=0)
        self.reply = make_comment(
            self.post_id, parent_id=self.top.id, author_id=self.bob, minutes=1
        )
        self.nested = make_comment(
            self.post_id, parent_id=self.reply.id, author_id=self.alice, minutes=2
        )
        self.forest = build_comment_tree([self.top, self.reply, self.nested])

    def test_views_mirror_tree_with_depth(self):
        views = render_comment_forest(self.forest, self.alice, self.post_author)

        assert [v.id for v in views] == [self.top.id]
        assert views[0].depth == 0
        assert views[0].replies[0].id == self.reply.id
        assert views[0].replies[0].depth == 1
        assert views[0].replies[0].replies[0].depth == 2

    def test_commenter_sees_edit_and_delete_on_own_comments_only(self):
        views = render_comment_forest(self.forest, self.alice, self.post_author)

        top, reply = views[0], views[0].replies[0]
        assert top.actions == ["reply", "edit", "delete"]
        assert reply.actions == ["reply"]

    def test_post_author_may_delete_but_not_edit(self):
        views = render_comment_forest(self.forest, self.post_author, self.post_author)

        reply = views[0].replies[0]
        assert reply.can_delete
        assert not reply.can_edit

    def test_anonymous_viewer_gets_no_controls(self):
        views = render_comment_forest(self.forest, None, self.post_author)

        assert views[0].actions == []
        assert views[0].replies[0].actions == []

    def test_deep_chain_renders_without_recursion(self):
        # Arrange
        comments = [make_comment(self.post_id, minutes=0)]
        for i in range(1, 3000):
            comments.append(make_comment(self.post_id, parent_id=comments[-1].id, minutes=i))

        # Act
        views = render_comment_forest(build_comment_tree(comments), None, None)

        # Assert
        view = views[0]
        while view.replies:
            view = view.replies[0]
        assert view.depth == 2999


class TestFormatCommentThread:
    """Tests for format_comment_thread."""

    def test_replies_are_indented_under_parents(self):
        # Arrange
        post_id = PostId(uuid4())
        viewer = UserId(uuid4())
        top = make_comment(post_id, author_id=viewer, text="Hello", author_name="Alice")
        reply = make_comment(
            post_id, parent_id=top.id, minutes=5, text="Hi back", author_name="Bob"
        )
        views = render_comment_forest(build_comment_tree([top, reply]), viewer, None)

        # Act
        text = format_comment_thread(views)

        # Assert
        blocks = text.split("\n\n")
        assert blocks[0].splitlines() == [
            "Alice on 2024-01-01 12:00",
            "Hello",
            "[reply] [edit] [delete]",
        ]
        assert blocks[1].splitlines() == [
            INDENT + "Bob on 2024-01-01 12:05",
            INDENT + "Hi back",
            INDENT + "[reply]",
        ]

    def test_edited_comment_is_marked(self):
        comment = make_comment(PostId(uuid4()), text="Changed")
        comment = comment.model_copy(
            update={"updated_at": comment.created_at + timedelta(minutes=1)}
        )
        views = render_comment_forest(build_comment_tree([comment]), None, None)

        assert format_comment_thread(views).splitlines()[0].endswith("(edited)")

    def test_empty_thread(self):
        assert format_comment_thread([]) == ""
