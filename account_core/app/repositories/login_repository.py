from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from account_core.domain.entities import Login


class ILoginRepository(ABC):
    """Login repository interface - application layer"""

    @abstractmethod
    async def load(self, query: Dict[str, Any]) -> Optional[Login]:
        """Load the single login matching query, or None"""
        pass

    @abstractmethod
    async def list(self, query: Dict[str, Any], limit: Optional[int] = None) -> List[Login]:
        """List logins matching query, newest first"""
        pass

    @abstractmethod
    async def save(self, login: Login) -> Login:
        """Insert or update login by id"""
        pass

    @abstractmethod
    async def consume_onetime(self, login_id: str) -> bool:
        """Flip onetime_active to False if still True. Returns True if this call consumed it."""
        pass

    @abstractmethod
    async def deactivate_all_by_user_id(self, user_id: str) -> int:
        """Deactivate every active login of a user. Returns count."""
        pass
