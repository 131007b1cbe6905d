from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from account_core.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from account_core.app.context import UserContext, UserOptions
from account_core.config import ApplicationConfig
from account_core.logging import setup_logging
from account_core.messages import UserMessages


def make_session_factory(engine):
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


async def init_models(engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


def create_user_messages(
    config=ApplicationConfig, engine=None, ctx: UserContext = None, configure_logging: bool = True
) -> UserMessages:
    """Wire the message surface to a database from configuration"""
    if configure_logging:
        setup_logging(config.LOG_DIR, config.LOG_LEVEL)

    if engine is None:
        engine = create_async_engine(config.DB_URI, echo=False, future=True)
    session_factory = make_session_factory(engine)

    if ctx is None:
        ctx = UserContext.build(UserOptions.from_config(config))

    return UserMessages(lambda: SqlAlchemyUnitOfWork(session_factory), ctx)
