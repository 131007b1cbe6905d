"""
Auth User Use Case

Resolves a presented token to an active account.
"""

from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.session_issuer import SessionIssuer
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.result import Error, Result, Return


class AuthUserUseCase:
    """
    Use case for token authentication.

    Business Rules:
    - ``token`` authenticates while the login is active
    - ``onetime_token`` additionally must be unexpired and unused,
      and is consumed by a successful call
    - The owning account must exist and be active
    - The onetime token is consumed only after every other check passed
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        onetime_token = request.get("onetime_token")

        async with self.uow:
            issuer = SessionIssuer(self.uow, self.ctx)
            checked = await issuer.verify(
                token=request.get("token"), onetime_token=onetime_token
            )
            if checked.is_err():
                return Return.err(checked.error)

            login = checked.value

            resolver = AccountResolver(self.uow, self.ctx)
            found = await resolver.find({"id": login.user_id})
            if found.is_err():
                return Return.err(found.error)

            account = found.value
            if not account.active:
                return Return.err(
                    Error("user-not-active", "User account is not active", {"user_id": account.id})
                )

            if onetime_token is not None:
                consumed = await issuer.consume(login)
                if consumed.is_err():
                    return Return.err(consumed.error)
                await self.uow.commit()

            return Return.ok(
                {
                    "user": account.view(resolver.projection(request)),
                    "login": login.view(),
                }
            )
