from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.errors import DuplicateKeyError
from account_core.app.policies.email_policy import EmailPolicy
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.result import Error, Result, Return


class ChangeEmailUseCase:
    """Move an account to ``new_email`` after the email policy passes"""

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        async with self.uow:
            resolver = AccountResolver(self.uow, self.ctx)
            found = await resolver.find(request)
            if found.is_err():
                return Return.err(found.error)

            email_result = await EmailPolicy(resolver).validate(request.get("new_email"))
            if email_result.is_err():
                return Return.err(email_result.error)

            account = found.value
            account.email = email_result.value

            try:
                account = await self.uow.users.save(account)
            except DuplicateKeyError:
                return Return.err(
                    Error("email-exists", "Email is already registered", {"email": account.email})
                )

            await self.uow.commit()

            return Return.ok({"user": account.view(resolver.projection(request))})
