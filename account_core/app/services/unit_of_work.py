from abc import ABC, abstractmethod

from account_core.app.repositories.account_repository import IAccountRepository
from account_core.app.repositories.login_repository import ILoginRepository
from account_core.app.repositories.verification_repository import IVerificationRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and commit points"""

    # Repository properties (initialized in __aenter__)
    users: IAccountRepository
    logins: ILoginRepository
    verifications: IVerificationRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
