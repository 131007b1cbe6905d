from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.result import Result, Return


class EncryptHookUseCase:
    """Expose the configured hasher: {pass, salt?} -> {pass, salt}"""

    def __init__(self, ctx: UserContext):
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        plaintext = request.get("pass", request.get("password"))
        hashed = await self.ctx.hasher.encrypt(plaintext, request.get("salt"))
        if hashed.is_err():
            return Return.err(hashed.error)
        return Return.ok({"pass": hashed.value["pass"], "salt": hashed.value["salt"]})
