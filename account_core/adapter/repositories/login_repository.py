from typing import Any, Dict, List, Optional

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from account_core.app.repositories.login_repository import ILoginRepository
from account_core.domain.entities import Login
from .query import split_query


class LoginRepository(ILoginRepository):
    """Login repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _select(self, query: Dict[str, Any]):
        clauses, extra = split_query(Login, query)
        if extra:
            raise ValueError(f"unknown login fields: {sorted(extra)}")
        return select(Login).where(*clauses)

    async def load(self, query: Dict[str, Any]) -> Optional[Login]:
        """Load the single login matching query, or None"""
        result = await self.session.exec(self._select(query).limit(1))
        return result.first()

    async def list(self, query: Dict[str, Any], limit: Optional[int] = None) -> List[Login]:
        """List logins matching query, newest first"""
        stmt = self._select(query).order_by(Login.when.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def save(self, login: Login) -> Login:
        """Insert or update login"""
        self.session.add(login)
        await self.session.flush()
        await self.session.refresh(login)
        return login

    async def consume_onetime(self, login_id: str) -> bool:
        """Use up the onetime token only if nobody else has"""
        stmt = (
            update(Login)
            .where(Login.id == login_id, Login.onetime_active == True)  # noqa: E712
            .values(onetime_active=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def deactivate_all_by_user_id(self, user_id: str) -> int:
        """Deactivate all active logins for a user"""
        stmt = (
            update(Login)
            .where(Login.user_id == user_id, Login.active == True)  # noqa: E712
            .values(active=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
