import logging
from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.errors import DuplicateKeyError
from account_core.app.policies.handle_policy import HandlePolicy
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.result import Error, Result, Return

logger = logging.getLogger(__name__)


class ChangeHandleUseCase:
    """Move an account to ``new_handle`` after the handle policy passes"""

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        async with self.uow:
            resolver = AccountResolver(self.uow, self.ctx)
            found = await resolver.find(request)
            if found.is_err():
                return Return.err(found.error)

            handle_result = await HandlePolicy(self.uow, self.ctx).validate(
                request.get("new_handle")
            )
            if handle_result.is_err():
                return Return.err(handle_result.error)

            account = found.value
            old_handle = account.handle
            account.handle = handle_result.value

            try:
                account = await self.uow.users.save(account)
            except DuplicateKeyError:
                return Return.err(
                    Error("handle-exists", "Handle is already taken", {"handle": account.handle})
                )

            await self.uow.commit()

            logger.info(f"User {account.id} changed handle from {old_handle}")
            return Return.ok({"user": account.view(resolver.projection(request))})
