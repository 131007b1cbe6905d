"""
Unit tests for RegisterUserUseCase

Tests all business logic with mocked dependencies.
"""
from unittest.mock import AsyncMock

import pytest

from account_core.app.errors import DuplicateKeyError
from account_core.app.use_cases.users import RegisterUserUseCase


@pytest.mark.asyncio
async def test_successful_registration(mock_uow, ctx):
    # Arrange
    request = {"handle": "alice", "email": "a@x.com", "pass": "secret123", "repeat": "secret123"}
    use_case = RegisterUserUseCase(mock_uow, ctx)

    # Act
    result = await use_case.execute(request)

    # Assert
    assert result.is_ok()
    user = result.value["user"]
    assert user["handle"] == "alice"
    assert user["email"] == "a@x.com"
    assert user["active"] is True
    assert user["pass"] and user["pass"] != "secret123"
    assert user["salt"] and user["salt"] != "secret123"
    assert "login" not in result.value

    saved = mock_uow.users.save.call_args[0][0]
    assert saved.handle == "alice"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_registration_with_legacy_nick_and_custom_fields(mock_uow, ctx):
    request = {"user_data": {"nick": "Bob", "name": "Bob B", "team": "red", "pass": "ignored-pass"}}

    result = await RegisterUserUseCase(mock_uow, ctx).execute(request)

    assert result.is_ok()
    user = result.value["user"]
    assert user["handle"] == "bob"
    assert user["name"] == "Bob B"
    assert user["team"] == "red"
    saved = mock_uow.users.save.call_args[0][0]
    assert saved.custom == {"team": "red"}


@pytest.mark.asyncio
async def test_repeat_mismatch(mock_uow, ctx):
    result = await RegisterUserUseCase(mock_uow, ctx).execute(
        {"handle": "alice", "email": "a@x.com", "pass": "secret123", "repeat": "nope"}
    )

    assert result.is_err()
    assert result.error.code == "repeat-password-mismatch"
    mock_uow.users.save.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_reserved_handle(mock_uow, ctx):
    result = await RegisterUserUseCase(mock_uow, ctx).execute({"handle": "guest"})

    assert result.is_err()
    assert result.error.code == "reserved"
    mock_uow.users.save.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_email(mock_uow, ctx):
    result = await RegisterUserUseCase(mock_uow, ctx).execute(
        {"handle": "alice", "email": "not-an-email"}
    )

    assert result.is_err()
    assert result.error.code == "email-invalid-format"
    mock_uow.users.save.assert_not_called()


@pytest.mark.asyncio
async def test_generated_handle_from_email(mock_uow, ctx):
    result = await RegisterUserUseCase(mock_uow, ctx).execute({"email": "carol@example.com"})

    assert result.is_ok()
    assert result.value["user"]["handle"].startswith("carol")


@pytest.mark.asyncio
async def test_store_backstop_on_duplicate_handle(mock_uow, ctx):
    # Pre-check passes (race), store rejects
    mock_uow.users.save = AsyncMock(side_effect=DuplicateKeyError("handle"))

    result = await RegisterUserUseCase(mock_uow, ctx).execute({"handle": "alice"})

    assert result.is_err()
    assert result.error.code == "handle-exists"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_registration_with_onetime_login(mock_uow, ctx):
    result = await RegisterUserUseCase(mock_uow, ctx).execute(
        {"handle": "alice", "onetime": True}
    )

    assert result.is_ok()
    login = result.value["login"]
    assert login["why"] == "register"
    assert login["onetime_active"] is True
    mock_uow.logins.save.assert_called_once()
    mock_uow.commit.assert_called_once()
