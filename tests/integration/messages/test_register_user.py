import pytest


@pytest.mark.asyncio
async def test_register_success(messages):
    out = await messages.handle(
        "register-user",
        {"handle": "alice", "email": "a@x.com", "pass": "secret123", "repeat": "secret123"},
    )

    assert out["ok"] is True
    assert out["user"]["handle"] == "alice"
    assert out["user"]["email"] == "a@x.com"
    assert out["user"]["active"] is True
    assert out["user"]["pass"] != "secret123"

    found = await messages.handle("get-user", {"handle": "alice"})
    assert found["ok"] is True
    assert found["user"]["id"] == out["user"]["id"]
    assert "pass" not in found["user"]


@pytest.mark.asyncio
async def test_register_repeat_mismatch_stores_nothing(messages):
    out = await messages.handle(
        "register-user",
        {"handle": "bob", "pass": "secret123", "repeat": "secret124"},
    )

    assert out["ok"] is False
    assert out["why"] == "repeat-password-mismatch"
    assert (await messages.handle("get-user", {"handle": "bob"}))["why"] == "user-not-found"


@pytest.mark.asyncio
async def test_register_reserved_handle(messages):
    out = await messages.handle("register-user", {"handle": "Guest"})

    assert out["ok"] is False
    assert out["why"] == "reserved"


@pytest.mark.asyncio
async def test_register_duplicate_handle_and_email(messages, alice):
    same_handle = await messages.handle("register-user", {"handle": "ALICE"})
    same_email = await messages.handle("register-user", {"handle": "alice2", "email": "a@x.com"})

    assert same_handle["why"] == "handle-exists"
    assert same_email["why"] == "email-exists"


@pytest.mark.asyncio
async def test_register_legacy_nick(messages):
    out = await messages.handle("register-user", {"nick": "Carol"})

    assert out["ok"] is True
    assert out["user"]["handle"] == "carol"
    assert (await messages.handle("get-user", {"nick": "carol"}))["ok"] is True


@pytest.mark.asyncio
async def test_register_with_login(messages):
    out = await messages.handle("register-user", {"handle": "dave", "login": True})

    assert out["ok"] is True
    assert out["login"]["user_id"] == out["user"]["id"]
    assert out["login"]["why"] == "register"


@pytest.mark.asyncio
async def test_custom_fields_round_trip(messages):
    await messages.handle("register-user", {"user_data": {"handle": "erin", "team": "red"}})

    out = await messages.handle("get-user", {"handle": "erin", "fields": ["team"]})

    assert out["user"]["team"] == "red"
    listed = await messages.handle("list-user", {"q": {"team": "red"}, "fields": ["team"]})
    assert [u["handle"] for u in listed["items"]] == ["erin"]


@pytest.mark.asyncio
async def test_register_handle_with_trailing_newline(messages, alice):
    out = await messages.handle("register-user", {"handle": "alice\n", "pass": "secret123"})

    assert out["ok"] is False
    assert out["why"] == "invalid-chars"


@pytest.mark.asyncio
async def test_register_display_name_email(messages, alice):
    out = await messages.handle(
        "register-user", {"handle": "bob", "email": "Bob <a@x.com>", "pass": "secret123"}
    )

    assert out["ok"] is False
    assert out["why"] == "email-invalid-format"
