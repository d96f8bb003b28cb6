"""Async HTTP client for the Quill API."""

from typing import Any

import httpx
import logfire

from quill.application.usecase.auth import AuthResponse
from quill.application.usecase.comment import CommentItem, GetCommentsResponse
from quill.application.usecase.post import ListPostsResponse, PostItem
from quill.config import ClientSettings
from quill.domain.model import Comment
from quill.domain.value import CommentId, PostId
from quill.interface.error import ApiError

from .session import ClientSession


class QuillClient:
    """Thin wrapper over the HTTP API.

    Requests carry the session token as ``Authorization: Bearer``. Any
    non-2xx answer raises ``ApiError``; transport failures surface as
    ``httpx.HTTPError``.
    """

    def __init__(
        self,
        base_url: str,
        session: ClientSession,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. http://localhost:8000
            session: Session whose token authenticates requests
            timeout: Per-request timeout in seconds
            transport: Custom httpx transport (tests use mock/ASGI transports)
        """
        self.session = session
        self._http = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        session: ClientSession,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "QuillClient":
        """Build a client from configuration."""
        return cls(
            base_url=settings.base_url or "http://localhost:8000",
            session=session,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "QuillClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        headers = {}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        with logfire.span("quill_client.request", method=method, path=path):
            response = await self._http.request(
                method, path, json=json, params=params, headers=headers
            )

        if response.is_error:
            raise ApiError(response.status_code, _error_detail(response))
        return response.json()

    # Users
    async def register(self, name: str, email: str, password: str) -> AuthResponse:
        data = await self._request(
            "POST", "/users", json={"name": name, "email": email, "password": password}
        )
        return AuthResponse.model_validate(data)

    async def login(self, email: str, password: str) -> AuthResponse:
        data = await self._request(
            "POST", "/users/login", json={"email": email, "password": password}
        )
        return AuthResponse.model_validate(data)

    async def logout(self) -> None:
        await self._request("POST", "/users/logout")

    # Posts
    async def list_posts(self, limit: int = 30, offset: int = 0) -> ListPostsResponse:
        data = await self._request(
            "GET", "/posts", params={"limit": limit, "offset": offset}
        )
        return ListPostsResponse.model_validate(data)

    async def get_post(self, post_id: PostId) -> PostItem:
        data = await self._request("GET", f"/posts/{post_id}")
        return PostItem.model_validate(data)

    async def create_post(self, title: str, content: str) -> PostItem:
        data = await self._request(
            "POST", "/posts", json={"title": title, "content": content}
        )
        return PostItem.model_validate(data)

    async def delete_post(self, post_id: PostId) -> None:
        await self._request("DELETE", f"/posts/{post_id}")

    # Comments
    async def list_comments(self, post_id: PostId) -> list[Comment]:
        """Fetch a post's comments as a flat, oldest-first list."""
        data = await self._request("GET", f"/posts/{post_id}/comments")
        return [item.to_domain() for item in GetCommentsResponse.model_validate(data).comments]

    async def create_comment(
        self, post_id: PostId, text: str, parent_id: CommentId | None = None
    ) -> Comment:
        payload: dict[str, Any] = {"text": text}
        if parent_id:
            payload["parent_id"] = str(parent_id)
        data = await self._request("POST", f"/posts/{post_id}/comments", json=payload)
        return CommentItem.model_validate(data).to_domain()

    async def update_comment(self, comment_id: CommentId, text: str) -> Comment:
        data = await self._request(
            "PUT", f"/comments/{comment_id}", json={"text": text}
        )
        return CommentItem.model_validate(data).to_domain()

    async def delete_comment(self, comment_id: CommentId) -> None:
        await self._request("DELETE", f"/comments/{comment_id}")


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str):
        return detail
    # Request validation errors come back as a list
    return str(detail if detail is not None else body)
