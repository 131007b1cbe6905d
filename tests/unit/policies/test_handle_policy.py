"""
Unit tests for HandlePolicy and ensure_handle
"""
import base64
import re

import pytest

from account_core.app.context import HandleOptions, UserContext, UserOptions
from account_core.app.policies.handle_policy import HandlePolicy, ensure_handle


@pytest.mark.asyncio
async def test_valid_handle_is_normalized(mock_uow, ctx):
    result = await HandlePolicy(mock_uow, ctx).validate("Alice_01")

    assert result.is_ok()
    assert result.value == "alice_01"
    mock_uow.users.exists.assert_called_once_with({"handle": "alice_01"})


@pytest.mark.asyncio
async def test_not_string(mock_uow, ctx):
    result = await HandlePolicy(mock_uow, ctx).validate(123)

    assert result.is_err()
    assert result.error.code == "not-string"


@pytest.mark.asyncio
async def test_reserved(mock_uow, ctx):
    result = await HandlePolicy(mock_uow, ctx).validate("Guest")

    assert result.is_err()
    assert result.error.code == "reserved"
    assert result.error.details == {"handle": "guest"}
    mock_uow.users.exists.assert_not_called()


@pytest.mark.asyncio
async def test_disallowed_term_is_encoded(mock_uow, clock):
    options = UserOptions(handle=HandleOptions(must_not_contain=lambda: ["badword"]))
    ctx = UserContext.build(options, clock=clock)

    result = await HandlePolicy(mock_uow, ctx).validate("BadWord")

    assert result.is_err()
    assert result.error.code == "disallowed"
    assert result.error.details == {
        "handle_base64": base64.b64encode(b"badword").decode()
    }
    assert "badword" not in str(result.error.details)


@pytest.mark.asyncio
async def test_invalid_chars(mock_uow, ctx):
    result = await HandlePolicy(mock_uow, ctx).validate("al-ice")

    assert result.is_err()
    assert result.error.code == "invalid-chars"


@pytest.mark.asyncio
async def test_too_short(mock_uow, ctx):
    result = await HandlePolicy(mock_uow, ctx).validate("ab")

    assert result.is_err()
    assert result.error.code == "handle-too-short"
    assert result.error.details["handle_length"] == 2
    assert result.error.details["minimum"] == 3


@pytest.mark.asyncio
async def test_too_long(mock_uow, ctx):
    result = await HandlePolicy(mock_uow, ctx).validate("a" * 16)

    assert result.is_err()
    assert result.error.code == "handle-too-long"
    assert result.error.details["maximum"] == 15


@pytest.mark.asyncio
async def test_taken(mock_uow, ctx):
    mock_uow.users.exists.return_value = True

    result = await HandlePolicy(mock_uow, ctx).validate("alice")

    assert result.is_err()
    assert result.error.code == "handle-exists"


@pytest.mark.asyncio
async def test_structural_checks_run_before_store_probe(mock_uow, ctx):
    for handle in ("guest", "a!", "ab", "a" * 40):
        result = await HandlePolicy(mock_uow, ctx).validate(handle)
        assert result.is_err()

    mock_uow.users.exists.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("handle", ["abc", "a_1", "zzzzzzzzzzzzzzz", "Mixed_Case9"])
async def test_accepted_handles_satisfy_policy(mock_uow, ctx, handle):
    result = await HandlePolicy(mock_uow, ctx).validate(handle)

    assert result.is_ok()
    accepted = result.value
    assert re.fullmatch(r"[a-z0-9_]+", accepted)
    assert 3 <= len(accepted) <= 15
    assert accepted not in ctx.reserved


def test_ensure_handle_keeps_given_handle():
    options = UserOptions()
    request = {"handle": "Alice", "user_data": {}}

    assert ensure_handle(request, options) == "alice"
    assert request["handle"] == "alice"
    assert request["user_data"]["handle"] == "alice"


def test_ensure_handle_from_email():
    options = UserOptions()
    request = {"email": "Bob@example.com"}

    handle = ensure_handle(request, options)

    assert re.match(r"^bob\d{4}$", handle)
    assert request["handle"] == handle


def test_ensure_handle_generated():
    options = UserOptions(make_handle=lambda: "generatedhandlexyz")
    request = {}

    handle = ensure_handle(request, options)

    assert handle == "generatedhandle"  # truncated to maxlen


@pytest.mark.asyncio
@pytest.mark.parametrize("handle", ["alice\n", "alice\r\n", "\nalice", "ali ce"])
async def test_charset_covers_whole_handle(mock_uow, ctx, handle):
    result = await HandlePolicy(mock_uow, ctx).validate(handle)

    assert result.is_err()
    assert result.error.code == "invalid-chars"
    mock_uow.users.exists.assert_not_called()
