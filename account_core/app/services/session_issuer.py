"""
Session Issuer

Creates, checks and terminates logins. Onetime logins expire lazily: nothing
sweeps them, the expiry is compared when the token is presented.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, Optional

from account_core.app.context import UserContext
from account_core.app.errors import ContextError
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.domain.base import SV
from account_core.domain.entities import Account, Login
from account_core.result import Error, Result, Return

logger = logging.getLogger(__name__)


class SessionIssuer:
    """
    Business Rules:
    - Every login gets a random bearer token
    - Onetime logins also get a single-use token and an absolute expiry
    - handle/email are copied at issue time and not refreshed later
    - Terminating an inactive login is a no-op
    - Consuming a onetime token is a conditional update, so only one
      concurrent caller can win
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def issue(
        self,
        account: Account,
        why: str,
        onetime: bool = False,
        login_data: Optional[Dict[str, Any]] = None,
    ) -> Login:
        if account is None or account.id is None:
            raise ContextError("login requires a saved account")
        if not why:
            raise ContextError("login requires a reason")

        options = self.ctx.options
        now = self.ctx.clock()

        login = Login(
            token=options.make_token(),
            user_id=account.id,
            handle=account.handle,
            email=account.email,
            active=True,
            why=why,
            login_data=dict(login_data or {}),
            sv=SV,
            when=now,
        )

        if onetime:
            login.onetime_token = options.make_token()
            login.onetime_active = True
            login.onetime_expiry = now + timedelta(milliseconds=options.onetime.expire)

        login = await self.uow.logins.save(login)
        logger.info(f"Login issued for user {account.id} ({why}, onetime={bool(onetime)})")
        return login

    async def terminate(self, login: Login) -> Login:
        if login.active:
            login.active = False
            login = await self.uow.logins.save(login)
        return login

    async def verify(
        self, token: Optional[str] = None, onetime_token: Optional[str] = None
    ) -> Result[Login]:
        """
        Check a presented token without consuming it.

        Errors:
            - no-token: neither token given
            - wrong-token: no login has this token
            - expired: onetime token at or past its expiry
            - login-inactive: login was terminated
            - already-used: onetime token was consumed
        """
        if onetime_token is not None:
            login = await self.uow.logins.load({"onetime_token": onetime_token})
        elif token is not None:
            login = await self.uow.logins.load({"token": token})
        else:
            return Return.err(Error("no-token", "No token provided"))

        if login is None:
            return Return.err(Error("wrong-token", "Token does not match any login"))

        if onetime_token is not None:
            if self.ctx.clock() >= login.onetime_expiry:
                return Return.err(
                    Error("expired", "Onetime token has expired", {"login_id": login.id})
                )

        if not login.active:
            return Return.err(
                Error("login-inactive", "Login is no longer active", {"login_id": login.id})
            )

        if onetime_token is not None and not login.onetime_active:
            return Return.err(
                Error("already-used", "Onetime token has already been used", {"login_id": login.id})
            )

        return Return.ok(login)

    async def consume(self, login: Login) -> Result[Login]:
        """Atomically use up the onetime token of a verified login"""
        consumed = await self.uow.logins.consume_onetime(login.id)
        if not consumed:
            return Return.err(
                Error("already-used", "Onetime token has already been used", {"login_id": login.id})
            )
        login.onetime_active = False
        return Return.ok(login)
