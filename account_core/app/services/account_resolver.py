"""
Account Resolver

Turns a request of any accepted shape into exactly one account, or a reason
why it could not.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from account_core.app.context import UNIQUE_FIELDS, UserContext
from account_core.app.policies.legacy import fix_nick_handle
from account_core.app.services.unit_of_work import UnitOfWork
from account_core.domain.entities import Account
from account_core.result import Error, Result, Return

logger = logging.getLogger(__name__)

# Query containers, in increasing precedence.
QUERY_CONTAINERS = ("user", "user_data")

# Explicit query keys, in decreasing precedence; user_q frees q for the caller.
EXPLICIT_QUERIES = ("user_q", "q")

# Never part of an account filter.
NON_QUERY_KEYS = frozenset({"pass", "password", "repeat", "salt", "fields"})


def _clean(query: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v
        for k, v in query.items()
        if v is not None and k not in NON_QUERY_KEYS and not k.endswith("$")
    }


class AccountResolver:
    """
    Business Rules:
    - A request already carrying an Account under ``user`` is used as is
    - Filter = user < user_data < explicit query, then one convenience field
    - user_id is an alias for id
    - Unique fields (id, handle, email) use a direct load
    - More than one match is a failure, never a silent pick
    """

    def __init__(self, uow: UnitOfWork, ctx: UserContext):
        self.uow = uow
        self.ctx = ctx

    def projection(self, request: Optional[Dict[str, Any]] = None) -> Tuple[str, ...]:
        """Standard fields plus caller fields, de-duplicated, order kept"""
        fields: Iterable[str] = ()
        if request is not None and isinstance(request.get("fields"), (list, tuple)):
            fields = request["fields"]
        wanted = [*fields, *self.ctx.standard_user_fields]
        return tuple(dict.fromkeys(f for f in wanted if isinstance(f, str) and f))

    def build_query(self, request: Dict[str, Any]) -> Dict[str, Any]:
        fix_nick_handle(request, self.ctx.options)

        query: Dict[str, Any] = {}
        for name in QUERY_CONTAINERS:
            container = request.get(name)
            if isinstance(container, dict):
                query.update(container)

        for name in EXPLICIT_QUERIES:
            explicit = request.get(name)
            if isinstance(explicit, dict):
                query.update(explicit)
                break

        # Only one convenience field is used, by precedence.
        for field in self.ctx.convenience_fields:
            if request.get(field) is not None:
                query[field] = request[field]
                break

        if query.get("id") is None and query.get("user_id") is not None:
            query["id"] = query["user_id"]
        query.pop("user_id", None)

        return _clean(query)

    async def find(self, request: Dict[str, Any]) -> Result[Account]:
        """
        Resolve the request to one account.

        Errors:
            - no-user-query: nothing to query by
            - user-not-found: no match
            - multiple-matching-users: the filter is ambiguous
        """
        if request is None:
            request = {}

        user = request.get("user")
        if isinstance(user, Account):
            return Return.ok(user)

        query = self.build_query(request)
        if not query:
            return Return.err(Error("no-user-query", "No user query provided"))

        if any(query.get(f) is not None for f in UNIQUE_FIELDS):
            account = await self.uow.users.load(query)
        else:
            accounts = await self.uow.users.list(query, limit=2)
            if len(accounts) > 1:
                logger.warning(f"Ambiguous user query on fields: {sorted(query)}")
                return Return.err(
                    Error(
                        "multiple-matching-users",
                        "More than one user matches the query",
                        {"fields": sorted(query)},
                    )
                )
            account = accounts[0] if accounts else None

        if account is None:
            return Return.err(Error("user-not-found", "User not found"))

        return Return.ok(account)

    async def exists(self, request: Dict[str, Any]) -> bool:
        """True if the query matches at least one account"""
        query = self.build_query(dict(request))
        if not query:
            return False
        return await self.uow.users.exists(query)
