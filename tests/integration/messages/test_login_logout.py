import pytest


@pytest.mark.asyncio
async def test_login_and_auth(messages, alice):
    login = await messages.handle("login-user", {"handle": "alice", "pass": "secret123"})

    assert login["ok"] is True
    assert login["why"] == "password"

    auth = await messages.handle("auth-user", {"token": login["login"]["token"]})
    assert auth["ok"] is True
    assert auth["user"]["id"] == alice["id"]


@pytest.mark.asyncio
async def test_login_wrong_password(messages, alice):
    out = await messages.handle("login-user", {"email": "a@x.com", "pass": "wrong-pass"})

    assert out["ok"] is False
    assert out["why"] == "invalid-password"


@pytest.mark.asyncio
async def test_inactive_user_cannot_login(messages, alice):
    adjusted = await messages.handle("adjust-user", {"handle": "alice", "active": False})
    assert adjusted["user"]["active"] is False

    out = await messages.handle("login-user", {"handle": "alice", "pass": "secret123"})

    assert out["ok"] is False
    assert out["why"] == "user-not-active"


@pytest.mark.asyncio
async def test_logout_is_idempotent(messages, alice):
    login = await messages.handle("login-user", {"handle": "alice", "auto": True})
    token = login["login"]["token"]

    first = await messages.handle("logout-user", {"token": token})
    second = await messages.handle("logout-user", {"token": token})

    assert first["ok"] is True and first["count"] == 1
    assert second["ok"] is True and second["count"] == 0
    assert second["login"]["active"] is False

    auth = await messages.handle("auth-user", {"token": token})
    assert auth["why"] == "login-inactive"


@pytest.mark.asyncio
async def test_logout_all_logins_of_user(messages, alice):
    for _ in range(3):
        await messages.handle("login-user", {"handle": "alice", "auto": True})

    out = await messages.handle("logout-user", {"handle": "alice"})
    assert out["count"] == 3

    active = await messages.handle("list-login", {"handle": "alice", "active": True})
    assert active["items"] == []
    everything = await messages.handle("list-login", {"handle": "alice"})
    assert len(everything["items"]) == 3


@pytest.mark.asyncio
async def test_onetime_token_is_single_use(messages, alice):
    login = await messages.handle("login-user", {"handle": "alice", "auto": True, "onetime": True})
    onetime = login["login"]["onetime_token"]

    first = await messages.handle("auth-user", {"onetime_token": onetime})
    second = await messages.handle("auth-user", {"onetime_token": onetime})

    assert first["ok"] is True
    assert second["ok"] is False
    assert second["why"] == "already-used"


@pytest.mark.asyncio
async def test_unknown_token(messages):
    out = await messages.handle("auth-user", {"token": "no-such-token"})

    assert out["why"] == "wrong-token"
