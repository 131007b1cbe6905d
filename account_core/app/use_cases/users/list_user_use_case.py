from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.policies.legacy import fix_nick_handle
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.app.use_cases.request_fields import read_flag
from account_core.result import Result, Return


class ListUserUseCase:
    """
    List accounts matching an optional query.

    Business Rules:
    - Query comes from ``q``; ``active`` narrows it
    - Results are capped at ``limit`` (request) or the configured default
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        active = read_flag(request, "active")
        if active.is_err():
            return Return.err(active.error)

        fix_nick_handle(request, self.ctx.options)

        query = dict(request.get("q") or {})
        if active.value is not None:
            query["active"] = active.value

        limit = request.get("limit")
        if not isinstance(limit, int) or limit <= 0:
            limit = self.ctx.options.limit

        async with self.uow:
            accounts = await self.uow.users.list(query, limit=limit)

            fields = AccountResolver(self.uow, self.ctx).projection(request)
            return Return.ok({"items": [account.view(fields) for account in accounts]})
