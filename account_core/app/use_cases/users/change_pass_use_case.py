from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.credential_manager import CredentialManager
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.result import Result, Return


class ChangePassUseCase:
    """
    Replace the password fields of an account.

    Business Rules:
    - Repeat confirmation and minimum length are checked before hashing
    - A fresh salt is generated
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

            pass_result = await CredentialManager(self.ctx).build_pass_fields(request)
            if pass_result.is_err():
                return Return.err(pass_result.error)

            account = found.value
            account.pass_ = pass_result.value["pass"]
            account.salt = pass_result.value["salt"]
            account = await self.uow.users.save(account)
            await self.uow.commit()

            return Return.ok({"user": account.view(resolver.projection(request))})
