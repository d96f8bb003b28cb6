"""Resolve the caller's identity from an incoming request."""

from fastapi import Request

from quill.domain.service import JWTService
from quill.domain.value import UserId
from quill.util.jwt import extract_bearer_token


def request_token(request: Request, jwt_service: JWTService) -> str | None:
    """Return the JWT carried by a request.

    ``Authorization: Bearer`` wins; browsers fall back to the auth cookie.
    """
    token = extract_bearer_token(request.headers.get("authorization"))
    if token:
        return token
    return request.cookies.get(jwt_service.auth_settings.cookie_name)


def current_user_id(request: Request, jwt_service: JWTService) -> UserId | None:
    """Return the authenticated user's ID, or None for anonymous callers."""
    return jwt_service.get_user_id_from_token(request_token(request, jwt_service))
