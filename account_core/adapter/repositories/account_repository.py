from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from account_core.app.repositories.account_repository import IAccountRepository
from account_core.domain.entities import Account
from .query import duplicate_key, split_query


def _matches_custom(account: Account, extra: Dict[str, Any]) -> bool:
    custom = account.custom or {}
    return all(custom.get(k) == v for k, v in extra.items())


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def load(self, query: Dict[str, Any]) -> Optional[Account]:
        """Load the single account matching query, or None"""
        accounts = await self.list(query, limit=1)
        return accounts[0] if accounts else None

    async def list(self, query: Dict[str, Any], limit: Optional[int] = None) -> List[Account]:
        """List accounts matching query, oldest first"""
        clauses, extra = split_query(Account, query)
        stmt = select(Account).where(*clauses).order_by(Account.when)
        if limit is not None and not extra:
            stmt = stmt.limit(limit)

        result = await self.session.exec(stmt)
        accounts = [a for a in result.all() if _matches_custom(a, extra)]
        return accounts if limit is None else accounts[:limit]

    async def exists(self, query: Dict[str, Any]) -> bool:
        """True if any account matches query"""
        clauses, extra = split_query(Account, query)
        if extra:
            return await self.load(query) is not None

        stmt = select(Account.id).where(*clauses).limit(1)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def save(self, account: Account) -> Account:
        """Insert or update account; unique violations raise DuplicateKeyError"""
        self.session.add(account)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise duplicate_key(exc, ("handle", "email")) from exc
        await self.session.refresh(account)
        return account

    async def remove(self, account: Account) -> None:
        """Delete account row"""
        await self.session.delete(account)
        await self.session.flush()
