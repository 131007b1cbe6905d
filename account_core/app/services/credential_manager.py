"""
Credential Manager

Password policy around the pluggable hasher: repeat confirmation and minimum
length on the way in, constant-time verification on login.
"""

from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.domain.entities import Account
from account_core.result import Error, Result, Return

# Containers searched for a password, in precedence order; None is the top level.
PASS_CONTAINERS = (None, "user", "user_data")

# Accepted password keys, in precedence order.
PASS_KEYS = ("pass", "password")


def extract_pass(request: Dict[str, Any]) -> Dict[str, Any]:
    """First container holding a string password wins, along with its repeat"""
    for name in PASS_CONTAINERS:
        container = request if name is None else request.get(name)
        if not isinstance(container, dict):
            continue
        for key in PASS_KEYS:
            if isinstance(container.get(key), str):
                return {"pass": container[key], "repeat": container.get("repeat")}
    return {}


class CredentialManager:
    def __init__(self, ctx: UserContext):
        self.ctx = ctx

    async def build_pass_fields(self, request: Dict[str, Any]) -> Result[Dict[str, str]]:
        """
        Build the stored password fields from a request.

        Returns:
            Result with {"pass", "salt"}, or Error

        Errors:
            - no-pass: no password in the request
            - repeat-password-mismatch: repeat given and different
            - password-too-short: shorter than password.minlen
            - any hasher error, unchanged
        """
        pass_data = extract_pass(request)
        password = pass_data.get("pass")
        repeat = pass_data.get("repeat")

        if password is None:
            return Return.err(Error("no-pass", "No password provided"))

        if isinstance(repeat, str) and repeat != password:
            return Return.err(
                Error("repeat-password-mismatch", "Password and repeat do not match")
            )

        minlen = self.ctx.options.password.minlen
        if len(password) < minlen:
            return Return.err(
                Error(
                    "password-too-short",
                    "Password is too short",
                    {"password_length": len(password), "minimum": minlen},
                )
            )

        hashed = await self.ctx.hasher.encrypt(password, request.get("salt"))
        if hashed.is_err():
            error = hashed.error
            return Return.err(Error(error.code, error.message, error.details or {}))

        return Return.ok({"pass": hashed.value["pass"], "salt": hashed.value["salt"]})

    async def verify(self, account: Account, proposed: Any) -> Result[None]:
        """Check a proposed password against the account's stored fields"""
        return await self.ctx.hasher.matches(proposed, account.pass_, account.salt)
