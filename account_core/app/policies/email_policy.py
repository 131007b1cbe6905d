"""
Email Policy

Validates email syntax and uniqueness.
"""

from typing import Any

from pydantic import validate_email

from account_core.app.services.account_resolver import AccountResolver
from account_core.result import Error, Result, Return


def is_valid_email(email: Any) -> bool:
    """A bare address only; the display-name form ``Name <addr>`` is rejected"""
    if not isinstance(email, str):
        return False
    try:
        _, address = validate_email(email)
    except ValueError:
        return False
    # The parsed address only differs by case (domain folding) for a bare address.
    return address.lower() == email.lower()


class EmailPolicy:
    def __init__(self, resolver: AccountResolver):
        self.resolver = resolver

    async def validate(self, email: Any) -> Result[str]:
        """Returns the unmodified email, or email-invalid-format / email-exists"""
        if not is_valid_email(email):
            return Return.err(
                Error("email-invalid-format", "Email address is not valid", {"email": email})
            )

        if await self.resolver.exists({"email": email}):
            return Return.err(
                Error("email-exists", "Email is already registered", {"email": email})
            )

        return Return.ok(email)
