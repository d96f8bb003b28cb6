"""Unit tests for CommentThread against a scripted HTTP transport."""

import json
from uuid import UUID, uuid4

import httpx
import pytest

from quill.domain.value import CommentId, PostId
from quill.interface.client import ClientSession, CommentThread, QuillClient, SessionUser

POST_ID = str(uuid4())
POST_AUTHOR = str(uuid4())
VIEWER = str(uuid4())


def _comment_json(text: str, parent_id: str | None = None, minute: int = 0) -> dict:
    stamp = f"2024-01-01T12:{minute:02d}:00"
    return {
        "id": str(uuid4()),
        "text": text,
        "post_id": POST_ID,
        "author": {"id": VIEWER, "name": "Alice"},
        "parent_id": parent_id,
        "created_at": stamp,
        "updated_at": stamp,
    }


class FakeApi:
    """Scripted stand-in for the server, recording every request."""

    def __init__(self) -> None:
        self.comments: list[dict] = []
        self.requests: list[tuple[str, str]] = []
        self.fail_writes: int | None = None
        self.offline = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)

        if request.method != "GET" and self.fail_writes:
            return httpx.Response(self.fail_writes, json={"detail": "Not allowed"})

        if request.url.path == f"/posts/{POST_ID}":
            return httpx.Response(200, json=self._post())
        if request.url.path == f"/posts/{POST_ID}/comments":
            if request.method == "GET":
                return httpx.Response(
                    200,
                    json={
                        "post_id": POST_ID,
                        "comments": self.comments,
                        "total": len(self.comments),
                    },
                )
            body = json.loads(request.content)
            item = _comment_json(
                body["text"], body.get("parent_id"), minute=len(self.comments)
            )
            self.comments.append(item)
            return httpx.Response(201, json=item)
        if request.url.path.startswith("/comments/") and request.method == "DELETE":
            comment_id = request.url.path.rsplit("/", 1)[-1]
            self.comments = [c for c in self.comments if c["id"] != comment_id]
            return httpx.Response(200, json={"success": True, "message": "Comment deleted"})
        return httpx.Response(404, json={"detail": "Not Found"})

    @staticmethod
    def _post() -> dict:
        return {
            "id": POST_ID,
            "title": "Post",
            "content": "<p>Body</p>",
            "author": {"id": POST_AUTHOR, "name": "Bob"},
            "like_count": 0,
            "has_liked": False,
            "created_at": "2024-01-01T11:00:00",
            "updated_at": "2024-01-01T11:00:00",
        }


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def session():
    session = ClientSession()
    session._user = SessionUser(
        user_id=VIEWER, name="Alice", email="alice@example.com", token="token-123"
    )
    return session


@pytest.fixture
def client(fake_api, session):
    return QuillClient(
        "http://quill.test", session, transport=httpx.MockTransport(fake_api.handler)
    )


class TestCommentThread:
    """Tests for CommentThread."""

    @pytest.mark.asyncio
    async def test_open_loads_post_author_and_comments(self, fake_api, client, session):
        # Arrange
        top = _comment_json("Hello")
        fake_api.comments = [top, _comment_json("Reply", parent_id=top["id"], minute=1)]

        # Act
        thread = await CommentThread.open(client, session, PostId(UUID(POST_ID)))

        # Assert
        assert str(thread.post_author_id) == POST_AUTHOR
        assert len(thread.views) == 1
        assert thread.views[0].text == "Hello"
        assert thread.views[0].replies[0].text == "Reply"
        assert thread.views[0].actions == ["reply", "edit", "delete"]

    @pytest.mark.asyncio
    async def test_write_is_followed_by_one_full_reload(self, fake_api, client, session):
        # Arrange
        thread = await CommentThread.open(client, session, PostId(UUID(POST_ID)))
        fake_api.requests.clear()

        # Act
        ok = await thread.add_comment("First")

        # Assert
        assert ok is True
        assert fake_api.requests == [
            ("POST", f"/posts/{POST_ID}/comments"),
            ("GET", f"/posts/{POST_ID}/comments"),
        ]
        assert [v.text for v in thread.views] == ["First"]

    @pytest.mark.asyncio
    async def test_requests_carry_bearer_token(self, fake_api, session):
        seen = []

        def handler(request):
            seen.append(request.headers.get("authorization"))
            return fake_api.handler(request)

        client = QuillClient("http://quill.test", session, transport=httpx.MockTransport(handler))

        await client.list_comments(PostId(UUID(POST_ID)))

        assert seen == ["Bearer token-123"]

    @pytest.mark.asyncio
    async def test_rejected_write_keeps_view_and_notifies(self, fake_api, client, session):
        # Arrange
        top = _comment_json("Keep me")
        fake_api.comments = [top]
        thread = await CommentThread.open(client, session, PostId(UUID(POST_ID)))
        before = thread.views
        fake_api.requests.clear()
        fake_api.fail_writes = 403

        # Act
        ok = await thread.delete(CommentId(UUID(top["id"])))

        # Assert
        assert ok is False
        assert thread.views is before
        assert fake_api.requests == [("DELETE", f"/comments/{top['id']}")]
        assert thread.notifications[-1].status_code == 403
        assert "Not allowed" in thread.notifications[-1].message
        assert thread.notifications[-1].level == "error"

    @pytest.mark.asyncio
    async def test_unreachable_server_is_a_notification(self, fake_api, client, session):
        # Arrange
        thread = await CommentThread.open(client, session, PostId(UUID(POST_ID)))
        fake_api.offline = True

        # Act
        ok = await thread.add_comment("Hello?")

        # Assert
        assert ok is False
        assert thread.notifications[-1].status_code is None

    @pytest.mark.asyncio
    async def test_blank_reply_sends_nothing(self, fake_api, client, session):
        # Arrange
        top = _comment_json("Hello")
        fake_api.comments = [top]
        thread = await CommentThread.open(client, session, PostId(UUID(POST_ID)))
        fake_api.requests.clear()

        # Act
        ok = await thread.reply(CommentId(UUID(top["id"])), "   ")

        # Assert
        assert ok is False
        assert fake_api.requests == []
        assert thread.notifications[-1].level == "info"

    @pytest.mark.asyncio
    async def test_blank_edit_sends_nothing_and_keeps_text(
        self, fake_api, client, session
    ):
        # Arrange
        top = _comment_json("Hello")
        fake_api.comments = [top]
        thread = await CommentThread.open(client, session, PostId(UUID(POST_ID)))
        fake_api.requests.clear()

        # Act
        ok = await thread.edit(CommentId(UUID(top["id"])), "\n  ")

        # Assert
        assert ok is False
        assert fake_api.requests == []
        assert thread.notifications[-1].level == "info"
        assert thread.notifications[-1].message == "Comment text is required"
        assert [view.text for view in thread.views] == ["Hello"]

    @pytest.mark.asyncio
    async def test_delete_then_reload_drops_comment(self, fake_api, client, session):
        # Arrange
        top = _comment_json("Bye")
        fake_api.comments = [top]
        thread = await CommentThread.open(client, session, PostId(UUID(POST_ID)))

        # Act
        ok = await thread.delete(CommentId(UUID(top["id"])))

        # Assert
        assert ok is True
        assert thread.views == []
        assert thread.render() == ""
