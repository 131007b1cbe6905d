"""
Message surface exposed to the host runtime.

Every operation takes one flat request dict and answers
``{"ok": True, ...payload}`` or ``{"ok": False, "why": code, "details"?: {...}}``.
"""

import logging
from typing import Any, Callable, Dict, Optional

from account_core.app.context import UserContext
from account_core.app.errors import ContextError
from account_core.app.services.account_resolver import AccountResolver
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.app.use_cases.auth import (
    AuthUserUseCase,
    ListLoginUseCase,
    LoginUserUseCase,
    LogoutUserUseCase,
)
from account_core.app.use_cases.hooks import EncryptHookUseCase, PassHookUseCase
from account_core.app.use_cases.users import (
    AdjustUserUseCase,
    ChangeEmailUseCase,
    ChangeHandleUseCase,
    ChangePassUseCase,
    CheckExistsUseCase,
    GetUserUseCase,
    ListUserUseCase,
    RegisterUserUseCase,
    RemoveUserUseCase,
    UpdateUserUseCase,
)
from account_core.app.use_cases.verify import (
    CheckVerifyUseCase,
    ListVerifyUseCase,
    MakeVerifyUseCase,
)
from account_core.result import Result
from .error import MessageError

logger = logging.getLogger(__name__)

# Message pattern -> use case taking (uow, ctx).
STORE_MESSAGES = {
    "register-user": RegisterUserUseCase,
    "get-user": GetUserUseCase,
    "list-user": ListUserUseCase,
    "adjust-user": AdjustUserUseCase,
    "update-user": UpdateUserUseCase,
    "remove-user": RemoveUserUseCase,
    "login-user": LoginUserUseCase,
    "logout-user": LogoutUserUseCase,
    "list-login": ListLoginUseCase,
    "make-verify": MakeVerifyUseCase,
    "list-verify": ListVerifyUseCase,
    "change-pass": ChangePassUseCase,
    "change-password": ChangePassUseCase,
    "change-handle": ChangeHandleUseCase,
    "change-email": ChangeEmailUseCase,
    "check-verify": CheckVerifyUseCase,
    "check-exists": CheckExistsUseCase,
    "auth-user": AuthUserUseCase,
}

# Message pattern -> use case taking (ctx) only.
HOOK_MESSAGES = {
    "encrypt-hook": EncryptHookUseCase,
    "pass-hook": PassHookUseCase,
}


def to_message(result: Result[Dict[str, Any]]) -> Dict[str, Any]:
    if result.is_err():
        return result.error.to_dict()
    return {"ok": True, **result.value}


class UserMessages:
    """
    Dispatches message patterns to use cases.

    A fresh unit of work is created per message, so concurrent messages
    share nothing but the read-only context.
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork], ctx: UserContext):
        if uow_factory is None or ctx is None:
            raise ContextError("UserMessages requires a unit of work factory and a context")
        self.uow_factory = uow_factory
        self.ctx = ctx

    @property
    def patterns(self):
        return sorted([*STORE_MESSAGES, *HOOK_MESSAGES])

    async def handle(self, pattern: str, request: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if request is None:
            request = {}
        if not isinstance(request, dict):
            raise MessageError(pattern, "request must be a dict")

        if pattern in STORE_MESSAGES:
            use_case = STORE_MESSAGES[pattern](self.uow_factory(), self.ctx)
        elif pattern in HOOK_MESSAGES:
            use_case = HOOK_MESSAGES[pattern](self.ctx)
        else:
            raise MessageError(pattern)

        try:
            result = await use_case.execute(request)
        except ContextError:
            logger.exception(f"Missing context while handling {pattern}")
            raise

        out = to_message(result)
        if not out["ok"]:
            logger.warning(f"{pattern} failed: {out['why']}")
        return out

    async def find_user(
        self, request: Dict[str, Any], special_ctx: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Resolve a user for other services; special_ctx overrides context fields"""
        ctx = self.ctx if special_ctx is None else self.ctx.merged(**special_ctx)
        uow = self.uow_factory()
        async with uow:
            resolver = AccountResolver(uow, ctx)
            found = await resolver.find(request)
            if found.is_err():
                return {"ok": False, "user": None, "why": found.error.code}
            return {"ok": True, "user": found.value.view(resolver.projection(request))}
