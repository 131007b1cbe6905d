"""
Register User Use Case

Creates a new account after every policy has passed.
"""

import logging
from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.errors import DuplicateKeyError
from account_core.app.policies.email_policy import EmailPolicy
from account_core.app.policies.handle_policy import HandlePolicy
from account_core.app.policies.legacy import fix_nick_handle
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.credential_manager import CredentialManager, extract_pass
from account_core.app.services.session_issuer import SessionIssuer
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.domain.base import SV
from account_core.domain.entities import Account
from account_core.result import Error, Result, Return

logger = logging.getLogger(__name__)

# Never copied from request data into custom fields.
PROTECTED_FIELDS = frozenset(
    {"id", "handle", "nick", "email", "name", "active", "pass", "password", "repeat", "salt", "sv", "when"}
)


def custom_fields(user_data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v for k, v in user_data.items() if k not in PROTECTED_FIELDS and not k.endswith("$")
    }


class RegisterUserUseCase:
    """
    Use case for account registration.

    Business Rules:
    - Legacy nick is rewritten to handle first
    - A handle is generated when none is given
    - Handle policy, then email policy (if email given), then password
    - The account is saved only after every check passed
    - The store's unique indexes back up the handle/email pre-checks
    - login=True or onetime=True also issues a login
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        options = self.ctx.options
        fix_nick_handle(request, options)

        async with self.uow:
            handle = options.ensure_handle(request, options)

            user_data = request.get("user_data") or request.get("user") or {}
            if not isinstance(user_data, dict):
                user_data = {}

            handle_result = await HandlePolicy(self.uow, self.ctx).validate(handle)
            if handle_result.is_err():
                return Return.err(handle_result.error)

            email = request.get("email")
            if email is None:
                email = user_data.get("email")

            if email is not None:
                resolver = AccountResolver(self.uow, self.ctx)
                email_result = await EmailPolicy(resolver).validate(email)
                if email_result.is_err():
                    return Return.err(email_result.error)

            pass_fields: Dict[str, str] = {}
            if extract_pass(request):
                pass_result = await CredentialManager(self.ctx).build_pass_fields(request)
                if pass_result.is_err():
                    return Return.err(pass_result.error)
                pass_fields = pass_result.value

            name = request.get("name")
            if name is None:
                name = user_data.get("name")

            active = user_data.get("active", request.get("active", True))

            account = Account(
                handle=handle_result.value,
                email=email,
                name=name,
                active=bool(active),
                pass_=pass_fields.get("pass"),
                salt=pass_fields.get("salt"),
                custom=custom_fields(user_data),
                sv=SV,
                when=self.ctx.clock(),
            )

            try:
                account = await self.uow.users.save(account)
            except DuplicateKeyError as exc:
                logger.warning(f"Store rejected registration on unique field {exc.field}")
                return Return.err(
                    Error(f"{exc.field}-exists", f"{exc.field.capitalize()} is already taken")
                )

            out: Dict[str, Any] = {"user": account.view()}

            onetime = bool(request.get("onetime"))
            if request.get("login") or onetime:
                login = await SessionIssuer(self.uow, self.ctx).issue(
                    account, "register", onetime=onetime, login_data=request.get("login_data")
                )
                out["login"] = login.view()

            await self.uow.commit()

            logger.info(f"Registered user {account.id}")
            return Return.ok(out)
