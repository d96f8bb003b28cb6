"""Unit tests for LoginUseCase and GetCurrentUserUseCase."""

import pytest

from quill.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    RegisterRequest,
    RegisterUseCase,
)
from quill.domain.error import InvalidCredentialsError
from quill.util.jwt import JWTError
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _register(unit_env, email: str = "alice@example.com"):
    register = await unit_env.get(RegisterUseCase)
    return await register.execute(
        RegisterRequest(name="Alice", email=email, password="secret1")
    )


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_login_with_correct_password(self, unit_env):
        # Arrange
        registered = await _register(unit_env)
        login = await unit_env.get(LoginUseCase)

        # Act
        response = await login.execute(
            LoginRequest(email="ALICE@example.com", password="secret1")
        )

        # Assert
        assert response.user_id == registered.user_id
        assert response.token

    @pytest.mark.asyncio
    async def test_login_with_wrong_password(self, unit_env):
        await _register(unit_env)
        login = await unit_env.get(LoginUseCase)

        with pytest.raises(InvalidCredentialsError):
            await login.execute(LoginRequest(email="alice@example.com", password="nope!!"))

    @pytest.mark.asyncio
    async def test_malformed_email_is_invalid_credentials(self, unit_env):
        login = await unit_env.get(LoginUseCase)

        with pytest.raises(InvalidCredentialsError):
            await login.execute(LoginRequest(email="alice", password="secret1"))


class TestGetCurrentUserUseCase:
    """Tests for GetCurrentUserUseCase."""

    @pytest.mark.asyncio
    async def test_token_resolves_to_user(self, unit_env):
        # Arrange
        registered = await _register(unit_env)
        get_current_user = await unit_env.get(GetCurrentUserUseCase)

        # Act
        response = await get_current_user.execute(
            GetCurrentUserRequest(token=registered.token)
        )

        # Assert
        assert response.user_id == registered.user_id
        assert response.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_garbage_token_raises(self, unit_env):
        get_current_user = await unit_env.get(GetCurrentUserUseCase)

        with pytest.raises(JWTError):
            await get_current_user.execute(GetCurrentUserRequest(token="not.a.jwt"))
