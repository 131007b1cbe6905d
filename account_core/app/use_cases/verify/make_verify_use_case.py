from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.app.services.verification_issuer import VerificationIssuer
from account_core.app.use_cases.request_fields import read_expire, read_flag
from account_core.result import Error, Result, Return


class MakeVerifyUseCase:
    """
    Issue a verification code for an account.

    Business Rules:
    - ``kind`` names the purpose and is required
    - ``expire`` (ms) overrides the configured lifetime
    - ``unique=True`` retires earlier active codes of the same kind
    - A malformed ``expire`` or ``unique`` is rejected, never coerced
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        kind = request.get("kind")
        if not isinstance(kind, str) or not kind:
            return Return.err(Error("no-kind", "Verification kind is required"))

        expire = read_expire(request)
        if expire.is_err():
            return Return.err(expire.error)

        unique = read_flag(request, "unique")
        if unique.is_err():
            return Return.err(unique.error)

        async with self.uow:
            found = await AccountResolver(self.uow, self.ctx).find(request)
            if found.is_err():
                return Return.err(found.error)

            verification = await VerificationIssuer(self.uow, self.ctx).issue(
                found.value,
                kind,
                expire=expire.value,
                unique=bool(unique.value),
                data=request.get("verify_data"),
            )
            await self.uow.commit()

            return Return.ok({"verify": verification.view()})
