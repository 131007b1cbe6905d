from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from account_core.domain.entities import Verification


class IVerificationRepository(ABC):
    """Verification repository interface - application layer"""

    @abstractmethod
    async def load(self, query: Dict[str, Any]) -> Optional[Verification]:
        """Load the single verification matching query, or None"""
        pass

    @abstractmethod
    async def list(
        self, query: Dict[str, Any], limit: Optional[int] = None
    ) -> List[Verification]:
        """List verifications matching query, newest first"""
        pass

    @abstractmethod
    async def exists(self, query: Dict[str, Any]) -> bool:
        """True if any verification matches query"""
        pass

    @abstractmethod
    async def save(self, verification: Verification) -> Verification:
        """Insert or update verification by id"""
        pass

    @abstractmethod
    async def consume(self, verify_id: str) -> bool:
        """Flip active to False if still True. Returns True if this call consumed it."""
        pass

    @abstractmethod
    async def deactivate_kind(self, user_id: str, kind: str) -> int:
        """Deactivate active verifications of one kind for a user. Returns count."""
        pass
