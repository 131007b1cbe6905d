"""
Check Verify Use Case

Checks and consumes a verification code.
"""

from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.app.services.verification_issuer import VerificationIssuer
from account_core.result import Error, Result, Return


class CheckVerifyUseCase:
    """
    Use case for verification checks.

    Business Rules:
    - ``code`` (or ``token``) is required
    - ``kind`` narrows the match to one purpose
    - When the request also identifies a user, the code must belong to it
    - Outcomes: ok, wrong-token, expired, already-used
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        code = request.get("code", request.get("token"))
        if not isinstance(code, str) or not code:
            return Return.err(Error("no-token", "No verification code provided"))

        async with self.uow:
            user_id = None
            found = await AccountResolver(self.uow, self.ctx).find(request)
            if found.is_ok():
                user_id = found.value.id
            elif found.error.code != "no-user-query":
                return Return.err(found.error)

            checked = await VerificationIssuer(self.uow, self.ctx).check(
                code, kind=request.get("kind"), user_id=user_id
            )
            if checked.is_err():
                return Return.err(checked.error)

            await self.uow.commit()

            return Return.ok({"verify": checked.value.view()})
