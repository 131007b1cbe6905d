import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

from account_core.app.context import UserContext, UserOptions
from account_core.app.services.password_hasher import BcryptHasher
from account_core.config import ApplicationConfig
from account_core.depends import create_user_messages


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def messages(engine):
    ctx = UserContext.build(UserOptions(bcrypt_rounds=4), hasher=BcryptHasher(rounds=4))
    return create_user_messages(ApplicationConfig, engine=engine, ctx=ctx, configure_logging=False)


@pytest_asyncio.fixture
async def alice(messages):
    out = await messages.handle(
        "register-user",
        {"handle": "alice", "email": "a@x.com", "pass": "secret123", "repeat": "secret123"},
    )
    assert out["ok"] is True
    return out["user"]
