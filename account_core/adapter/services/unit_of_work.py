from typing import Callable

from sqlmodel.ext.asyncio.session import AsyncSession

from account_core.adapter.repositories.account_repository import AccountRepository
from account_core.adapter.repositories.login_repository import LoginRepository
from account_core.adapter.repositories.verification_repository import VerificationRepository
from account_core.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern

    Opens one session per ``async with`` block and closes it on exit.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def __aenter__(self):
        self.session = self.session_factory()
        # Initialize all repositories with the session
        self.users = AccountRepository(self.session)
        self.logins = LoginRepository(self.session)
        self.verifications = VerificationRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()
        await self.session.close()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
