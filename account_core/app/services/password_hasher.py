"""
Password hashers.

The one-way transform is a strategy chosen once when the context is built.
Both implementations return ``{"pass", "salt"}`` on success and never see
policy such as minimum length or repeat confirmation.
"""

import asyncio
import base64
import hashlib
import hmac
import secrets
from abc import ABC, abstractmethod
from typing import Dict, Optional

import bcrypt

from account_core.result import Error, Result, Return


class PasswordHasher(ABC):
    """Capability interface for the password hash hook"""

    @abstractmethod
    async def encrypt(self, plaintext: str, salt: Optional[str] = None) -> Result[Dict[str, str]]:
        """Derive pass from plaintext; generate a salt when none is given"""
        pass

    async def matches(self, proposed: str, stored_pass: str, salt: str) -> Result[None]:
        """Re-derive with the stored salt and compare in constant time"""
        if not isinstance(proposed, str) or stored_pass is None or salt is None:
            return Return.err(Error("invalid-password", "Password does not match"))

        derived = await self.encrypt(proposed, salt)
        if derived.is_err():
            return Return.err(derived.error)

        if not hmac.compare_digest(derived.value["pass"], stored_pass):
            return Return.err(Error("invalid-password", "Password does not match"))

        return Return.ok(None)


class BcryptHasher(PasswordHasher):
    """bcrypt; the salt string carries the cost factor"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    async def encrypt(self, plaintext: str, salt: Optional[str] = None) -> Result[Dict[str, str]]:
        if not isinstance(plaintext, str):
            return Return.err(Error("not-string", "Password must be a string"))

        salt_bytes = salt.encode() if salt else bcrypt.gensalt(self.rounds)

        try:
            hashed = await asyncio.to_thread(bcrypt.hashpw, plaintext.encode(), salt_bytes)
        except ValueError as exc:
            return Return.err(
                Error("hash-failed", "Password could not be hashed", {"message": str(exc)})
            )

        return Return.ok({"pass": hashed.decode(), "salt": salt_bytes.decode()})


class Pbkdf2Hasher(PasswordHasher):
    """PBKDF2-HMAC-SHA512 with a random salt of ``bytelen`` bytes"""

    def __init__(self, rounds: int = 11111, bytelen: int = 16, salt_format: str = "hex"):
        if salt_format not in ("hex", "base64"):
            raise ValueError(f"unsupported salt format: {salt_format}")
        self.rounds = rounds
        self.bytelen = bytelen
        self.salt_format = salt_format

    def generate_salt(self) -> str:
        raw = secrets.token_bytes(self.bytelen)
        if self.salt_format == "base64":
            return base64.b64encode(raw).decode()
        return raw.hex()

    async def encrypt(self, plaintext: str, salt: Optional[str] = None) -> Result[Dict[str, str]]:
        if not isinstance(plaintext, str):
            return Return.err(Error("not-string", "Password must be a string"))

        salt = salt or self.generate_salt()
        derived = await asyncio.to_thread(
            hashlib.pbkdf2_hmac, "sha512", plaintext.encode(), salt.encode(), self.rounds
        )
        return Return.ok({"pass": derived.hex(), "salt": salt})
