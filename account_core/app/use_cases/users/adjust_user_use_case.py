from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.app.use_cases.request_fields import read_flag
from account_core.result import Result, Return


class AdjustUserUseCase:
    """Activate or deactivate an account via the ``active`` flag"""

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        active = read_flag(request, "active")
        if active.is_err():
            return Return.err(active.error)

        async with self.uow:
            resolver = AccountResolver(self.uow, self.ctx)
            found = await resolver.find(request)
            if found.is_err():
                return Return.err(found.error)

            account = found.value
            if active.value is not None:
                account.active = active.value
                account = await self.uow.users.save(account)
                await self.uow.commit()

            return Return.ok({"user": account.view(resolver.projection(request))})
