from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from account_core.app.context import UserContext, UserOptions
from account_core.app.services.password_hasher import BcryptHasher


class FakeClock:
    """Callable clock whose time only moves when told to"""

    def __init__(self, now: datetime = None):
        self.now = now or datetime(2026, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def _returns_argument(entity):
    return entity


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ctx(clock):
    """Default options with a cheap bcrypt cost"""
    return UserContext.build(UserOptions(bcrypt_rounds=4), hasher=BcryptHasher(rounds=4), clock=clock)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.load = AsyncMock(return_value=None)
    uow.users.list = AsyncMock(return_value=[])
    uow.users.exists = AsyncMock(return_value=False)
    uow.users.save = AsyncMock(side_effect=_returns_argument)
    uow.users.remove = AsyncMock()

    uow.logins = MagicMock()
    uow.logins.load = AsyncMock(return_value=None)
    uow.logins.list = AsyncMock(return_value=[])
    uow.logins.save = AsyncMock(side_effect=_returns_argument)
    uow.logins.consume_onetime = AsyncMock(return_value=True)
    uow.logins.deactivate_all_by_user_id = AsyncMock(return_value=0)

    uow.verifications = MagicMock()
    uow.verifications.load = AsyncMock(return_value=None)
    uow.verifications.list = AsyncMock(return_value=[])
    uow.verifications.exists = AsyncMock(return_value=False)
    uow.verifications.save = AsyncMock(side_effect=_returns_argument)
    uow.verifications.consume = AsyncMock(return_value=True)
    uow.verifications.deactivate_kind = AsyncMock(return_value=0)

    return uow
