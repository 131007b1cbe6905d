"""
Verification Issuer

Short-lived challenge tokens bound to an account and a purpose (kind).
"""

import logging
from datetime import timedelta
from typing import Any, Dict, Optional

from account_core.app.context import UserContext
from account_core.app.errors import ContextError
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.domain.base import SV
from account_core.domain.entities import Account, Verification
from account_core.result import Error, Result, Return

logger = logging.getLogger(__name__)


class VerificationIssuer:
    """
    Business Rules:
    - code is random and unrelated to the account
    - expiry is absolute: issue time + expire (ms)
    - check distinguishes wrong-token, expired and already-used
    - expiry wins over the consumed flag
    - unique=True deactivates earlier active codes of the same kind
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def issue(
        self,
        account: Account,
        kind: str,
        expire: Optional[int] = None,
        unique: bool = False,
        data: Optional[Dict[str, Any]] = None,
    ) -> Verification:
        if account is None or account.id is None:
            raise ContextError("verification requires a saved account")

        now = self.ctx.clock()
        expire = self.ctx.options.verify.expire if expire is None else int(expire)

        if unique:
            replaced = await self.uow.verifications.deactivate_kind(account.id, kind)
            if replaced:
                logger.info(f"Replaced {replaced} active {kind} verification(s) for user {account.id}")

        verification = Verification(
            code=self.ctx.options.make_token(),
            user_id=account.id,
            kind=kind,
            active=True,
            expiry=now + timedelta(milliseconds=expire),
            data=dict(data or {}),
            sv=SV,
            when=now,
        )
        return await self.uow.verifications.save(verification)

    async def check(
        self,
        code: str,
        kind: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Result[Verification]:
        """
        Check and consume a verification code.

        Errors:
            - wrong-token: unknown code, or bound to another kind/account
            - expired: now is at or past expiry
            - already-used: consumed earlier, or by a concurrent check
        """
        verification = await self.uow.verifications.load({"code": code})

        if (
            verification is None
            or (kind is not None and verification.kind != kind)
            or (user_id is not None and verification.user_id != user_id)
        ):
            return Return.err(Error("wrong-token", "Verification code does not match"))

        now = self.ctx.clock()
        if now >= verification.expiry:
            return Return.err(
                Error("expired", "Verification code has expired", {"verify_id": verification.id})
            )

        if not verification.active:
            return Return.err(
                Error("already-used", "Verification code has already been used", {"verify_id": verification.id})
            )

        if not await self.uow.verifications.consume(verification.id):
            return Return.err(
                Error("already-used", "Verification code has already been used", {"verify_id": verification.id})
            )

        verification.active = False
        verification.used_when = now
        verification = await self.uow.verifications.save(verification)
        return Return.ok(verification)

    async def exists(self, account: Account, kind: Optional[str] = None) -> bool:
        """Any verification, expired or not, for the account (and kind)"""
        query: Dict[str, Any] = {"user_id": account.id}
        if kind is not None:
            query["kind"] = kind
        return await self.uow.verifications.exists(query)
