from typing import Any, Dict

from account_core.app.context import UserContext
from account_core.result import Result, Return


class PassHookUseCase:
    """Compare ``proposed`` with stored ``pass``/``salt`` using the configured hasher"""

    def __init__(self, ctx: UserContext):
        self.ctx = ctx

    async def execute(self, request: Dict[str, Any]) -> Result[Dict[str, Any]]:
        matched = await self.ctx.hasher.matches(
            request.get("proposed"), request.get("pass"), request.get("salt")
        )
        if matched.is_err():
            return Return.err(matched.error)
        return Return.ok({})
