"""
Options and the per-instance context.

``UserOptions`` is the recognized configuration. ``UserContext`` is built from
it once at startup and passed explicitly to every component; lookup sets are
frozen and the context is never mutated afterwards.
"""

import dataclasses
import re
import secrets
import string
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, FrozenSet, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from account_core.app.services.password_hasher import (
    BcryptHasher,
    PasswordHasher,
    Pbkdf2Hasher,
)
from account_core.domain.base import generate_uuid, utcnow

HANDLE_CHARSET = re.compile(r"[a-z0-9_]+")

# Convenience query fields, in decreasing precedence.
CONVENIENCE_FIELDS: Tuple[str, ...] = ("id", "user_id", "handle", "email", "name")

# Fields that identify at most one account.
UNIQUE_FIELDS: Tuple[str, ...] = ("id", "handle", "email")


def default_must_match(handle: str) -> bool:
    return HANDLE_CHARSET.fullmatch(handle) is not None


def default_blocklist() -> Iterable[str]:
    return ("fuck", "shit", "cunt", "piss", "twat", "wank", "bollocks", "bastard")


def default_make_handle() -> str:
    return "".join(secrets.choice(string.ascii_lowercase) for _ in range(12))


def default_ensure_handle(request: Dict, options: "UserOptions") -> str:
    # Imported here to avoid a cycle with the handle policy module.
    from account_core.app.policies.handle_policy import ensure_handle

    return ensure_handle(request, options)


class SaltOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    bytelen: int = 16
    format: str = "hex"


class PasswordOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    minlen: int = 8


class HandleOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    minlen: int = 3
    maxlen: int = 15
    reserved: Tuple[str, ...] = ("guest", "visitor")
    must_match: Callable[[str], bool] = default_must_match
    # a function returning an iterable of terms
    must_not_contain: Callable[[], Iterable[str]] = default_blocklist
    downcase: bool = True


class ExpireOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    expire: int  # milliseconds


class UserOptions(BaseModel):
    """Recognized options, with the same defaults as ApplicationConfig"""

    model_config = ConfigDict(frozen=True)

    salt: SaltOptions = Field(default_factory=SaltOptions)
    rounds: int = 11111
    bcrypt_rounds: int = 12
    hasher: str = "bcrypt"

    standard_fields: Tuple[str, ...] = ("handle", "email", "name", "active")

    onetime: ExpireOptions = Field(default_factory=lambda: ExpireOptions(expire=15 * 60 * 1000))
    verify: ExpireOptions = Field(default_factory=lambda: ExpireOptions(expire=10 * 60 * 1000))

    password: PasswordOptions = Field(default_factory=PasswordOptions)
    handle: HandleOptions = Field(default_factory=HandleOptions)

    limit: int = 111  # default result limit

    ensure_handle: Callable[..., str] = default_ensure_handle
    make_handle: Callable[[], str] = default_make_handle
    make_token: Callable[[], str] = generate_uuid

    @classmethod
    def from_config(cls, config) -> "UserOptions":
        return cls(
            salt=SaltOptions(bytelen=config.SALT_BYTELEN, format=config.SALT_FORMAT),
            rounds=config.ROUNDS,
            bcrypt_rounds=config.BCRYPT_ROUNDS,
            hasher=config.HASHER,
            standard_fields=tuple(config.STANDARD_FIELDS),
            onetime=ExpireOptions(expire=config.ONETIME_EXPIRE),
            verify=ExpireOptions(expire=config.VERIFY_EXPIRE),
            password=PasswordOptions(minlen=config.PASSWORD_MINLEN),
            handle=HandleOptions(
                minlen=config.HANDLE_MINLEN,
                maxlen=config.HANDLE_MAXLEN,
                reserved=tuple(config.HANDLE_RESERVED),
                downcase=config.HANDLE_DOWNCASE,
            ),
            limit=config.RESULT_LIMIT,
        )


def make_hasher(options: UserOptions) -> PasswordHasher:
    if options.hasher == "bcrypt":
        return BcryptHasher(rounds=options.bcrypt_rounds)
    if options.hasher == "pbkdf2":
        return Pbkdf2Hasher(
            rounds=options.rounds,
            bytelen=options.salt.bytelen,
            salt_format=options.salt.format,
        )
    raise ValueError(f"unknown hasher: {options.hasher}")


@dataclass(frozen=True)
class UserContext:
    options: UserOptions
    hasher: PasswordHasher
    reserved: FrozenSet[str]
    disallowed: FrozenSet[str]
    standard_user_fields: Tuple[str, ...]
    convenience_fields: Tuple[str, ...] = CONVENIENCE_FIELDS
    clock: Callable[[], datetime] = utcnow

    @classmethod
    def build(
        cls,
        options: Optional[UserOptions] = None,
        hasher: Optional[PasswordHasher] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> "UserContext":
        options = options or UserOptions()
        return cls(
            options=options,
            hasher=hasher or make_hasher(options),
            reserved=frozenset(options.handle.reserved),
            disallowed=frozenset(options.handle.must_not_contain()),
            standard_user_fields=tuple(options.standard_fields),
            clock=clock,
        )

    def merged(self, **overrides) -> "UserContext":
        return dataclasses.replace(self, **overrides)
