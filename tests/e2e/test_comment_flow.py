"""End-to-end tests for posts and threaded comments over HTTP."""

import pytest
from fastapi.testclient import TestClient

from quill.application.usecase.comment import MAX_NESTED_DEPTH
from quill.domain.error import StoreError
from quill.interface.api.app import create_app
from quill.persistence.repository.inmemory import InMemoryCommentRepository
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by in-memory persistence."""
    return TestClient(create_app(build_test_container()))


def _auth(client, name: str) -> dict:
    response = client.post(
        "/users",
        json={"name": name, "email": f"{name.lower()}@example.com", "password": "secret1"},
    )
    assert response.status_code == 201
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


def _comment(client, post_id, headers, text, parent_id=None):
    body = {"text": text}
    if parent_id:
        body["parent_id"] = parent_id
    response = client.post(f"/posts/{post_id}/comments", json=body, headers=headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def thread(client):
    """Bob's post with a short discussion: A <- B <- C, plus a separate D."""
    bob = _auth(client, "Bob")
    alice = _auth(client, "Alice")
    carol = _auth(client, "Carol")
    post = client.post(
        "/posts", json={"title": "Hello", "content": "<p>World</p>"}, headers=bob
    ).json()
    a = _comment(client, post["id"], alice, "A")
    b = _comment(client, post["id"], carol, "B", parent_id=a["id"])
    c = _comment(client, post["id"], alice, "C", parent_id=b["id"])
    d = _comment(client, post["id"], carol, "D")
    return {
        "post": post,
        "bob": bob,
        "alice": alice,
        "carol": carol,
        "comments": {"A": a, "B": b, "C": c, "D": d},
    }


def _texts(client, post_id):
    response = client.get(f"/posts/{post_id}/comments")
    assert response.status_code == 200
    return [c["text"] for c in response.json()["comments"]]


class TestPosts:
    """End-to-end tests for posts and likes."""

    def test_create_requires_authentication(self, client):
        response = client.post("/posts", json={"title": "Hi", "content": "<p>x</p>"})

        assert response.status_code == 401

    def test_like_and_unlike(self, client, thread):
        # Arrange
        post_id = thread["post"]["id"]

        # Act
        liked = client.post(f"/posts/{post_id}/like", headers=thread["alice"])
        again = client.post(f"/posts/{post_id}/like", headers=thread["alice"])
        viewed = client.get(f"/posts/{post_id}", headers=thread["alice"])
        unliked = client.delete(f"/posts/{post_id}/like", headers=thread["alice"])

        # Assert
        assert liked.status_code == 201
        assert again.status_code == 409
        assert viewed.json()["like_count"] == 1
        assert viewed.json()["has_liked"] is True
        assert unliked.json()["like_count"] == 0

    def test_list_posts(self, client, thread):
        response = client.get("/posts", params={"limit": 10})

        assert response.status_code == 200
        assert response.json()["total"] == 1
        assert response.json()["posts"][0]["title"] == "Hello"

    def test_only_author_deletes_post(self, client, thread):
        post_id = thread["post"]["id"]

        forbidden = client.delete(f"/posts/{post_id}", headers=thread["alice"])
        deleted = client.delete(f"/posts/{post_id}", headers=thread["bob"])

        assert forbidden.status_code == 403
        assert deleted.status_code == 200
        assert client.get(f"/posts/{post_id}").status_code == 404
        assert client.get(f"/posts/{post_id}/comments").status_code == 404


class TestComments:
    """End-to-end tests for the comment thread."""

    def test_flat_list_is_oldest_first(self, client, thread):
        assert _texts(client, thread["post"]["id"]) == ["A", "B", "C", "D"]

    def test_tree_endpoint_nests_replies(self, client, thread):
        # Act
        response = client.get(f"/posts/{thread['post']['id']}/comments/tree")

        # Assert
        data = response.json()
        assert data["total"] == 4
        assert [c["text"] for c in data["comments"]] == ["A", "D"]
        b = data["comments"][0]["replies"][0]
        assert b["text"] == "B"
        assert [c["text"] for c in b["replies"]] == ["C"]

    def test_anonymous_cannot_comment(self, client, thread):
        response = client.post(
            f"/posts/{thread['post']['id']}/comments", json={"text": "Hi"}
        )

        assert response.status_code == 401

    def test_reply_to_comment_of_other_post_is_rejected(self, client, thread):
        # Arrange
        other = client.post(
            "/posts", json={"title": "Other", "content": "<p>x</p>"}, headers=thread["bob"]
        ).json()

        # Act
        response = client.post(
            f"/posts/{other['id']}/comments",
            json={"text": "Hi", "parent_id": thread["comments"]["A"]["id"]},
            headers=thread["alice"],
        )

        # Assert
        assert response.status_code == 400

    def test_author_edits_comment(self, client, thread):
        a = thread["comments"]["A"]

        response = client.put(
            f"/comments/{a['id']}", json={"text": "A, edited"}, headers=thread["alice"]
        )

        assert response.status_code == 200
        assert response.json()["text"] == "A, edited"
        assert _texts(client, thread["post"]["id"])[0] == "A, edited"

    def test_post_author_cannot_edit_others_comment(self, client, thread):
        a = thread["comments"]["A"]

        response = client.put(
            f"/comments/{a['id']}", json={"text": "Bob was here"}, headers=thread["bob"]
        )

        assert response.status_code == 403
        assert _texts(client, thread["post"]["id"])[0] == "A"

    def test_stranger_cannot_delete(self, client, thread):
        # Arrange
        dave = _auth(client, "Dave")

        # Act
        response = client.delete(
            f"/comments/{thread['comments']['A']['id']}", headers=dave
        )

        # Assert
        assert response.status_code == 403
        assert _texts(client, thread["post"]["id"]) == ["A", "B", "C", "D"]

    def test_post_author_deletes_whole_thread(self, client, thread):
        # Act
        response = client.delete(
            f"/comments/{thread['comments']['A']['id']}", headers=thread["bob"]
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Comment deleted"}
        assert _texts(client, thread["post"]["id"]) == ["D"]

    def test_commenter_deletes_middle_of_chain(self, client, thread):
        # Act
        response = client.delete(
            f"/comments/{thread['comments']['B']['id']}", headers=thread["carol"]
        )

        # Assert
        assert response.status_code == 200
        assert _texts(client, thread["post"]["id"]) == ["A", "D"]

    def test_deleting_twice_is_not_found(self, client, thread):
        url = f"/comments/{thread['comments']['D']['id']}"

        first = client.delete(url, headers=thread["carol"])
        second = client.delete(url, headers=thread["carol"])

        assert first.status_code == 200
        assert second.status_code == 404

    def test_blank_comment_is_unprocessable(self, client, thread):
        response = client.post(
            f"/posts/{thread['post']['id']}/comments",
            json={"text": ""},
            headers=thread["alice"],
        )

        assert response.status_code == 422


def _chain(client, post_id, headers, length):
    """Post a reply chain of ``length`` comments and return their ids."""
    ids = []
    parent_id = None
    for i in range(length):
        parent_id = _comment(client, post_id, headers, f"level {i}", parent_id)["id"]
        ids.append(parent_id)
    return ids


class TestDeepThreads:
    """Reply chains deeper than the interpreter's recursion limit."""

    def test_deleting_root_of_deep_chain_removes_everything(self, client, thread):
        # Arrange
        post_id = thread["post"]["id"]
        ids = _chain(client, post_id, thread["alice"], 1100)

        # Act
        response = client.delete(f"/comments/{ids[0]}", headers=thread["alice"])

        # Assert
        assert response.status_code == 200
        assert _texts(client, post_id) == ["A", "B", "C", "D"]

    def test_tree_nests_up_to_the_depth_limit(self, client, thread):
        # Arrange
        post_id = thread["post"]["id"]
        _chain(client, post_id, thread["alice"], MAX_NESTED_DEPTH)

        # Act
        response = client.get(f"/posts/{post_id}/comments/tree")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 4 + MAX_NESTED_DEPTH
        node = body["comments"][-1]
        depth = 1
        while node["replies"]:
            node = node["replies"][0]
            depth += 1
        assert depth == MAX_NESTED_DEPTH
        assert node["text"] == f"level {MAX_NESTED_DEPTH - 1}"

    def test_tree_deeper_than_limit_is_unprocessable(self, client, thread):
        # Arrange
        post_id = thread["post"]["id"]
        _chain(client, post_id, thread["alice"], MAX_NESTED_DEPTH + 1)

        # Act
        tree = client.get(f"/posts/{post_id}/comments/tree")
        flat = client.get(f"/posts/{post_id}/comments")

        # Assert
        assert tree.status_code == 422
        assert "flat comment list" in tree.json()["detail"]
        assert flat.status_code == 200
        assert flat.json()["total"] == 4 + MAX_NESTED_DEPTH + 1


class TestStoreFailures:
    """A failing store surfaces as 503 and nothing half-deleted is reported."""

    def test_store_error_during_cascade_is_service_unavailable(
        self, client, thread, monkeypatch
    ):
        # Arrange
        async def failing_delete(self, comment_id):
            raise StoreError("comment.delete", "connection reset")

        monkeypatch.setattr(InMemoryCommentRepository, "delete", failing_delete)

        # Act
        response = client.delete(
            f"/comments/{thread['comments']['A']['id']}", headers=thread["bob"]
        )

        # Assert
        assert response.status_code == 503
        assert response.json() == {
            "detail": "Storage temporarily unavailable, please retry"
        }
        assert _texts(client, thread["post"]["id"]) == ["A", "B", "C", "D"]
