"""User account routes: registration, login and session status."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, Response, status
from pydantic import BaseModel

from quill.application.usecase.auth import (
    AuthResponse,
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    RegisterRequest,
    RegisterUseCase,
)
from quill.config import Settings
from quill.domain.error import (
    BusinessRuleViolationError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from quill.domain.service import JWTService
from quill.interface.api.identity import request_token
from quill.util.jwt import JWTError

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Authentication status response."""

    authenticated: bool
    user: GetCurrentUserResponse | None = None


def _set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    is_production = settings.is_production
    response.set_cookie(
        key=settings.auth.cookie_name,
        value=token,
        httponly=True,
        secure=is_production,
        samesite="none" if is_production else "lax",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )


@router.post("", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    response: Response,
    register_use_case: FromDishka[RegisterUseCase],
    settings: FromDishka[Settings],
) -> AuthResponse:
    """Create an account and sign the new user in.

    Args:
        request: Name, email and password
        response: FastAPI response object (receives the auth cookie)
        register_use_case: Register use case from DI
        settings: Application settings from DI

    Returns:
        The new user and their token

    Raises:
        HTTPException: 400 on invalid input, 409 if the email is taken
    """
    try:
        result = await register_use_case.execute(request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except BusinessRuleViolationError as e:
        logfire.warn("Registration rejected", error=str(e))
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    _set_auth_cookie(response, result.token, settings)
    return result


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> AuthResponse:
    """Log in with email and password.

    Raises:
        HTTPException: 401 if the credentials don't match
    """
    try:
        result = await login_use_case.execute(request)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    _set_auth_cookie(response, result.token, settings)
    return result


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """Logout user by clearing authentication cookie.

    Args:
        response: FastAPI response object
        settings: Application settings from DI

    Returns:
        Logout success message
    """
    response.delete_cookie(key=settings.auth.cookie_name, path="/")
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    request: Request,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    jwt_service: FromDishka[JWTService],
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status.

    This endpoint is safe to call without authentication - it will return
    authenticated=false instead of raising an error, so clients can probe
    their session state.

    Examples:
        Authenticated:
        {
            "authenticated": true,
            "user": {"user_id": "...", "name": "Alice", ...}
        }

        Unauthenticated:
        {
            "authenticated": false,
            "user": null
        }
    """
    token = request_token(request, jwt_service)
    if not token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(GetCurrentUserRequest(token=token))
        return AuthStatusResponse(authenticated=True, user=user)
    except (JWTError, ValueError):
        # Invalid or expired token - expected, not an error
        return AuthStatusResponse(authenticated=False)
    except NotFoundError:
        # JWT valid but user no longer exists
        return AuthStatusResponse(authenticated=False)
