from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.app.use_cases.request_fields import read_flag
from account_core.result import Result, Return


class ListLoginUseCase:
    """List the logins of one account, optionally only active ones"""

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        active = read_flag(request, "active")
        if active.is_err():
            return Return.err(active.error)

        async with self.uow:
            found = await AccountResolver(self.uow, self.ctx).find(request)
            if found.is_err():
                return Return.err(found.error)

            query: Dict[str, Any] = {"user_id": found.value.id}
            if active.value is not None:
                query["active"] = active.value

            logins = await self.uow.logins.list(query, limit=self.ctx.options.limit)
            return Return.ok({"items": [login.view() for login in logins]})
