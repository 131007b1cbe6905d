from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.session_issuer import SessionIssuer
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.result import Error, Result, Return


class LogoutUserUseCase:
    """
    Use case for logout.

    Business Rules:
    - ``token`` or ``login_id`` ends that one login; repeating it succeeds
    - Otherwise every active login of the resolved user is ended
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        async with self.uow:
            if request.get("token") is not None or request.get("login_id") is not None:
                if request.get("token") is not None:
                    login = await self.uow.logins.load({"token": request["token"]})
                else:
                    login = await self.uow.logins.load({"id": request["login_id"]})

                if login is None:
                    return Return.err(Error("login-not-found", "Login not found"))

                was_active = login.active
                login = await SessionIssuer(self.uow, self.ctx).terminate(login)
                await self.uow.commit()

                return Return.ok({"count": 1 if was_active else 0, "login": login.view()})

            found = await AccountResolver(self.uow, self.ctx).find(request)
            if found.is_err():
                return Return.err(found.error)

            count = await self.uow.logins.deactivate_all_by_user_id(found.value.id)
            await self.uow.commit()

            return Return.ok({"count": count, "user_id": found.value.id})
