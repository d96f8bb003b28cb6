"""End-to-end tests driving the API through the client comment thread."""

from uuid import UUID

import httpx
import pytest

from quill.domain.value import PostId
from quill.interface.api.app import create_app
from quill.interface.client import ClientSession, CommentThread, QuillClient
from quill.interface.error import ApiError
from tests.di import build_test_container


@pytest.fixture
def transport():
    """In-process transport to a fresh app with in-memory persistence."""
    return httpx.ASGITransport(app=create_app(build_test_container()))


async def _signed_in(transport, name: str) -> QuillClient:
    session = ClientSession()
    client = QuillClient("http://quill.test", session, transport=transport)
    await session.register(client, name, f"{name.lower()}@example.com", "secret1")
    return client


class TestClientThread:
    """Tests for CommentThread talking to the real application."""

    @pytest.mark.asyncio
    async def test_discussion_round_trip(self, transport):
        # Arrange
        bob = await _signed_in(transport, "Bob")
        alice = await _signed_in(transport, "Alice")
        post = await bob.create_post("Hello", "<p>World</p>")
        thread = await CommentThread.open(alice, alice.session, PostId(UUID(post.id)))

        # Act
        assert await thread.add_comment("First!")
        top = thread.views[0]
        assert await thread.reply(top.id, "Replying to myself")
        assert await thread.reply(thread.views[0].replies[0].id, "And again")

        # Assert
        assert [v.text for v in thread.views] == ["First!"]
        reply = thread.views[0].replies[0]
        assert reply.text == "Replying to myself"
        assert reply.replies[0].text == "And again"
        assert reply.replies[0].depth == 2
        assert "Alice on" in thread.render()

        await bob.close()
        await alice.close()

    @pytest.mark.asyncio
    async def test_forbidden_delete_leaves_thread_and_notifies(self, transport):
        # Arrange
        bob = await _signed_in(transport, "Bob")
        alice = await _signed_in(transport, "Alice")
        carol = await _signed_in(transport, "Carol")
        post = await bob.create_post("Hello", "<p>World</p>")
        alice_thread = await CommentThread.open(alice, alice.session, PostId(UUID(post.id)))
        await alice_thread.add_comment("Mine")
        carol_thread = await CommentThread.open(carol, carol.session, PostId(UUID(post.id)))

        # Act
        ok = await carol_thread.delete(carol_thread.views[0].id)

        # Assert
        assert ok is False
        assert carol_thread.views[0].actions == ["reply"]
        assert carol_thread.notifications[-1].status_code == 403
        assert len(carol_thread.views) == 1

    @pytest.mark.asyncio
    async def test_post_author_moderates_thread(self, transport):
        # Arrange
        bob = await _signed_in(transport, "Bob")
        alice = await _signed_in(transport, "Alice")
        post = await bob.create_post("Hello", "<p>World</p>")
        alice_thread = await CommentThread.open(alice, alice.session, PostId(UUID(post.id)))
        await alice_thread.add_comment("Top")
        await alice_thread.reply(alice_thread.views[0].id, "Nested")
        bob_thread = await CommentThread.open(bob, bob.session, PostId(UUID(post.id)))
        assert bob_thread.views[0].actions == ["reply", "delete"]

        # Act
        ok = await bob_thread.delete(bob_thread.views[0].id)

        # Assert
        assert ok is True
        assert bob_thread.views == []
        assert await alice_thread.refresh()
        assert alice_thread.views == []

    @pytest.mark.asyncio
    async def test_logout_clears_session_and_controls(self, transport):
        # Arrange
        alice = await _signed_in(transport, "Alice")
        post = await alice.create_post("Hello", "<p>World</p>")
        thread = await CommentThread.open(alice, alice.session, PostId(UUID(post.id)))
        await thread.add_comment("Hi")

        # Act
        await alice.session.logout(alice)
        thread.rerender()

        # Assert
        assert not alice.session.is_authenticated
        assert thread.views[0].actions == []
        with pytest.raises(ApiError) as exc_info:
            await alice.create_post("Again", "<p>x</p>")
        assert exc_info.value.status_code == 401
