from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.app.services.verification_issuer import VerificationIssuer
from account_core.result import Error, Result, Return


class CheckExistsUseCase:
    """
    Existence check without returning account data.

    Business Rules:
    - Without ``kind``: does the query resolve to an account
    - With ``kind``: does the resolved account have any verification of
      that kind, expired or not (lets callers resend idempotently)
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        async with self.uow:
            found = await AccountResolver(self.uow, self.ctx).find(request)
            if found.is_err():
                return Return.err(found.error)

            kind = request.get("kind")
            if kind is None:
                return Return.ok({"user_id": found.value.id})

            issuer = VerificationIssuer(self.uow, self.ctx)
            if not await issuer.exists(found.value, kind):
                return Return.err(
                    Error("verify-not-found", "No verification of this kind", {"kind": kind})
                )

            return Return.ok({"user_id": found.value.id, "kind": kind})
