import logging
from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.result import Result, Return

logger = logging.getLogger(__name__)


class RemoveUserUseCase:
    """
    Ask the store to remove one account.

    Logins and verifications of the account are left untouched.
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        async with self.uow:
            resolver = AccountResolver(self.uow, self.ctx)
            found = await resolver.find(request)
            if found.is_err():
                return Return.err(found.error)

            account = found.value
            view = account.view(resolver.projection(request))

            await self.uow.users.remove(account)
            await self.uow.commit()

            logger.info(f"Removed user {account.id}")
            return Return.ok({"user": view})
