"""
Login User Use Case

Authenticates an account and issues a login.
"""

import logging
from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.credential_manager import CredentialManager, extract_pass
from account_core.app.services.session_issuer import SessionIssuer
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.result import Error, Result, Return

logger = logging.getLogger(__name__)


class LoginUserUseCase:
    """
    Use case for user login.

    Business Rules:
    - Inactive accounts never log in
    - auto=True logs in without a password (trusted caller)
    - Otherwise the password is verified in constant time
    - onetime=True adds a single-use token to the login
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

            account = found.value

            if not account.active:
                return Return.err(
                    Error("user-not-active", "User account is not active", {"user_id": account.id})
                )

            if request.get("auto") is True:
                why = "auto"
            else:
                pass_data = extract_pass(request)
                if not pass_data:
                    return Return.err(Error("no-login-method", "No password or auto login given"))

                verified = await CredentialManager(self.ctx).verify(account, pass_data["pass"])
                if verified.is_err():
                    logger.info(f"Failed password login for user {account.id}")
                    return Return.err(verified.error)
                why = "password"

            login = await SessionIssuer(self.uow, self.ctx).issue(
                account,
                why,
                onetime=bool(request.get("onetime")),
                login_data=request.get("login_data"),
            )
            await self.uow.commit()

            return Return.ok(
                {
                    "user": account.view(resolver.projection(request)),
                    "login": login.view(),
                    "why": why,
                }
            )
