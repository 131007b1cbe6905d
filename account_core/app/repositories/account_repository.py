from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from account_core.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer

    Queries are exact-match filters keyed by public field name. Keys that are
    not account columns match against custom fields.
    """

    @abstractmethod
    async def load(self, query: Dict[str, Any]) -> Optional[Account]:
        """Load the single account matching query, or None"""
        pass

    @abstractmethod
    async def list(self, query: Dict[str, Any], limit: Optional[int] = None) -> List[Account]:
        """List accounts matching query"""
        pass

    @abstractmethod
    async def exists(self, query: Dict[str, Any]) -> bool:
        """True if any account matches query (id-only projection)"""
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Insert or update account by id"""
        pass

    @abstractmethod
    async def remove(self, account: Account) -> None:
        """Remove account from the store"""
        pass
