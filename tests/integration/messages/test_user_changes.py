import pytest

from account_core.messages import MessageError


@pytest.mark.asyncio
async def test_multiple_matching_users(messages):
    await messages.handle("register-user", {"handle": "sam1", "name": "Sam"})
    await messages.handle("register-user", {"handle": "sam2", "name": "Sam"})

    out = await messages.handle("get-user", {"name": "Sam"})

    assert out["ok"] is False
    assert out["why"] == "multiple-matching-users"


@pytest.mark.asyncio
async def test_change_pass(messages, alice):
    changed = await messages.handle(
        "change-pass", {"handle": "alice", "pass": "newsecret1", "repeat": "newsecret1"}
    )
    assert changed["ok"] is True

    old = await messages.handle("login-user", {"handle": "alice", "pass": "secret123"})
    new = await messages.handle("login-user", {"handle": "alice", "pass": "newsecret1"})
    assert old["why"] == "invalid-password"
    assert new["ok"] is True


@pytest.mark.asyncio
async def test_change_pass_too_short(messages, alice):
    out = await messages.handle("change-pass", {"handle": "alice", "pass": "short"})

    assert out["why"] == "password-too-short"
    assert out["details"]["minimum"] == 8


@pytest.mark.asyncio
async def test_change_handle(messages, alice):
    await messages.handle("register-user", {"handle": "bob"})

    taken = await messages.handle("change-handle", {"handle": "alice", "new_handle": "bob"})
    moved = await messages.handle("change-handle", {"handle": "alice", "new_handle": "Alicia"})

    assert taken["why"] == "handle-exists"
    assert moved["ok"] is True
    assert moved["user"]["handle"] == "alicia"
    assert (await messages.handle("get-user", {"handle": "alicia"}))["user"]["id"] == alice["id"]


@pytest.mark.asyncio
async def test_change_email(messages, alice):
    invalid = await messages.handle("change-email", {"handle": "alice", "new_email": "nope"})
    moved = await messages.handle("change-email", {"handle": "alice", "new_email": "alice@x.com"})

    assert invalid["why"] == "email-invalid-format"
    assert moved["user"]["email"] == "alice@x.com"


@pytest.mark.asyncio
async def test_update_user(messages, alice):
    out = await messages.handle(
        "update-user",
        {"handle": "alice", "user_data": {"name": "Alice A", "team": "blue"}, "fields": ["team"]},
    )

    assert out["ok"] is True
    assert out["user"]["name"] == "Alice A"
    assert out["user"]["team"] == "blue"


@pytest.mark.asyncio
async def test_remove_user(messages, alice):
    removed = await messages.handle("remove-user", {"id": alice["id"]})

    assert removed["ok"] is True
    assert (await messages.handle("get-user", {"id": alice["id"]}))["why"] == "user-not-found"


@pytest.mark.asyncio
async def test_check_exists(messages, alice):
    assert (await messages.handle("check-exists", {"email": "a@x.com"}))["user_id"] == alice["id"]
    assert (await messages.handle("check-exists", {"email": "b@x.com"}))["why"] == "user-not-found"


@pytest.mark.asyncio
async def test_list_user_active_filter(messages, alice):
    await messages.handle("register-user", {"handle": "bob", "active": False})

    active = await messages.handle("list-user", {"active": True})
    everyone = await messages.handle("list-user", {})

    assert [u["handle"] for u in active["items"]] == ["alice"]
    assert len(everyone["items"]) == 2


@pytest.mark.asyncio
async def test_unknown_message(messages):
    with pytest.raises(MessageError):
        await messages.handle("frobnicate-user", {})
