from typing import Any, Dict, List, Optional

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from account_core.app.repositories.verification_repository import IVerificationRepository
from account_core.domain.entities import Verification
from .query import split_query


class VerificationRepository(IVerificationRepository):
    """Verification repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _select(self, query: Dict[str, Any]):
        clauses, extra = split_query(Verification, query)
        if extra:
            raise ValueError(f"unknown verification fields: {sorted(extra)}")
        return select(Verification).where(*clauses)

    async def load(self, query: Dict[str, Any]) -> Optional[Verification]:
        """Load the single verification matching query, or None"""
        result = await self.session.exec(self._select(query).limit(1))
        return result.first()

    async def list(
        self, query: Dict[str, Any], limit: Optional[int] = None
    ) -> List[Verification]:
        """List verifications matching query, newest first"""
        stmt = self._select(query).order_by(Verification.when.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def exists(self, query: Dict[str, Any]) -> bool:
        """True if any verification matches query"""
        clauses, _ = split_query(Verification, query)
        stmt = select(Verification.id).where(*clauses).limit(1)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def save(self, verification: Verification) -> Verification:
        """Insert or update verification"""
        self.session.add(verification)
        await self.session.flush()
        await self.session.refresh(verification)
        return verification

    async def consume(self, verify_id: str) -> bool:
        """Deactivate only if still active"""
        stmt = (
            update(Verification)
            .where(Verification.id == verify_id, Verification.active == True)  # noqa: E712
            .values(active=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def deactivate_kind(self, user_id: str, kind: str) -> int:
        """Deactivate active verifications of one kind for a user"""
        stmt = (
            update(Verification)
            .where(
                Verification.user_id == user_id,
                Verification.kind == kind,
                Verification.active == True,  # noqa: E712
            )
            .values(active=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
