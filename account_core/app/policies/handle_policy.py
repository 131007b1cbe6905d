"""
Handle Policy

Validates and normalizes account handles.
"""

import base64
import logging
import secrets
from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.result import Error, Result, Return

logger = logging.getLogger(__name__)


class HandlePolicy:
    """
    Business Rules:
    - Checks run in order and stop at the first failure
    - Structural checks run before the uniqueness probe against the store
    - Disallowed terms are only ever reported base64 encoded
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    async def validate(self, handle: Any) -> Result[str]:
        """
        Validate a candidate handle.

        Returns:
            Result with the normalized handle, or Error with one of
            not-string, reserved, disallowed, invalid-chars,
            handle-too-short, handle-too-long, handle-exists
        """
        options = self.ctx.options.handle

        if not isinstance(handle, str):
            return Return.err(
                Error("not-string", "Handle must be a string", {"handle": handle})
            )

        if options.downcase:
            handle = handle.lower()

        if handle in self.ctx.reserved:
            return Return.err(
                Error("reserved", "Handle is reserved", {"handle": handle})
            )

        if handle in self.ctx.disallowed:
            return Return.err(
                Error(
                    "disallowed",
                    "Handle is not allowed",
                    {"handle_base64": base64.b64encode(handle.encode()).decode()},
                )
            )

        if not options.must_match(handle):
            return Return.err(
                Error("invalid-chars", "Handle contains invalid characters", {"handle": handle})
            )

        if len(handle) < options.minlen:
            return Return.err(
                Error(
                    "handle-too-short",
                    "Handle is too short",
                    {
                        "handle": handle,
                        "handle_length": len(handle),
                        "minimum": options.minlen,
                    },
                )
            )

        if options.maxlen < len(handle):
            return Return.err(
                Error(
                    "handle-too-long",
                    "Handle is too long",
                    {
                        "handle": handle,
                        "handle_length": len(handle),
                        "maximum": options.maxlen,
                    },
                )
            )

        if await self.uow.users.exists({"handle": handle}):
            return Return.err(
                Error("handle-exists", "Handle is already taken", {"handle": handle})
            )

        return Return.ok(handle)


def ensure_handle(request: Dict[str, Any], options) -> str:
    """
    Make sure the request carries a handle, generating one if needed.

    NOTE: modifies request (and its user data container) for consistency.
    The email, if used, is assumed to be validated separately.
    """
    user_data = request.get("user_data") or request.get("user") or {}
    handle = request.get("handle")
    if handle is None:
        handle = user_data.get("handle")

    if not isinstance(handle, str):
        email = request.get("email") or user_data.get("email")
        if isinstance(email, str) and "@" in email:
            handle = email.split("@")[0].lower() + "".join(
                secrets.choice("0123456789") for _ in range(4)
            )
        else:
            handle = options.make_handle()

    handle = handle[: options.handle.maxlen]

    if options.handle.downcase:
        handle = handle.lower()

    request["handle"] = handle
    if isinstance(user_data, dict):
        user_data["handle"] = handle

    return handle
