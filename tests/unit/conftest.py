import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.in_memory_session_store import InMemorySessionStore
from src.api.utils.jwt import JwtTokenService
from src.app.services.password_hasher import PasswordHasher
from src.domain.entities import User


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.find_by_email_or_username = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    return uow

@pytest.fixture
def password_hasher():
    # Lowest bcrypt cost keeps the suite fast
    return PasswordHasher(rounds=4)

@pytest.fixture
def token_service():
    return JwtTokenService("unit-test-secret")

@pytest.fixture
def session_store():
    return InMemorySessionStore()

@pytest.fixture
def make_user(password_hasher):
    def _make_user(password: str = "longenough1", **overrides) -> User:
        fields = {
            "email": "a@x.com",
            "username": "abc",
            "first_name": "A",
            "last_name": "B",
            "password_hash": password_hasher.hash(password),
        }
        fields.update(overrides)
        return User(**fields)

    return _make_user
