"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from quill.config import AuthSettings
from quill.util.error import UtilError


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    name: str
    exp: datetime


class JWTError(UtilError):
    """JWT-related error."""

    pass


def create_token(user_id: str, name: str, settings: AuthSettings) -> str:
    """Create a signed JWT for the user.

    Args:
        user_id: User ID
        name: User display name
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "name": name,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid, expired or missing claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "user_id"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e

    return TokenPayload(
        user_id=payload["user_id"],
        name=payload.get("name", ""),
        exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def extract_bearer_token(authorization: str | None) -> str | None:
    """Pull the token out of an ``Authorization: Bearer <token>`` header.

    Args:
        authorization: Raw header value

    Returns:
        The token, or None when the header is absent or uses another scheme
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
