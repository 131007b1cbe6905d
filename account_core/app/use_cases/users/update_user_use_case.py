"""
Update User Use Case

Merges ``user_data`` into an existing account.
"""

import logging
from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.errors import DuplicateKeyError
from account_core.app.policies.email_policy import EmailPolicy
from account_core.app.policies.handle_policy import HandlePolicy
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.result import Error, Result, Return
from .register_user_use_case import custom_fields

logger = logging.getLogger(__name__)


class UpdateUserUseCase:
    """
    Use case for updating account data.

    Business Rules:
    - ``user_data`` holds the new values and is not part of the lookup
    - A changed handle or email passes its policy first
    - id, pass and salt cannot be set here (see change-pass)
    - One save after all checks
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        user_data = request.get("user_data") or {}
        lookup = {k: v for k, v in request.items() if k != "user_data"}

        async with self.uow:
            resolver = AccountResolver(self.uow, self.ctx)
            found = await resolver.find(lookup)
            if found.is_err():
                return Return.err(found.error)

            account = found.value

            handle = user_data.get("handle", user_data.get("nick"))
            if isinstance(handle, str) and self.ctx.options.handle.downcase:
                handle = handle.lower()
            if handle is not None and handle != account.handle:
                handle_result = await HandlePolicy(self.uow, self.ctx).validate(handle)
                if handle_result.is_err():
                    return Return.err(handle_result.error)
                account.handle = handle_result.value

            email = user_data.get("email")
            if email is not None and email != account.email:
                email_result = await EmailPolicy(resolver).validate(email)
                if email_result.is_err():
                    return Return.err(email_result.error)
                account.email = email_result.value

            if user_data.get("name") is not None:
                account.name = user_data["name"]

            if user_data.get("active") is not None:
                account.active = bool(user_data["active"])

            account.set_custom(custom_fields(user_data))

            try:
                account = await self.uow.users.save(account)
            except DuplicateKeyError as exc:
                logger.warning(f"Store rejected update on unique field {exc.field}")
                return Return.err(
                    Error(f"{exc.field}-exists", f"{exc.field.capitalize()} is already taken")
                )

            await self.uow.commit()

            return Return.ok({"user": account.view(resolver.projection(request))})
