from typing import Dict, Optional
from uuid import UUID

from src.adapter.repositories.in_memory_user_repository import InMemoryUserRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User


class InMemoryUnitOfWork(UnitOfWork):
    """
    UnitOfWork over a plain dict.

    Writes land immediately; commit and rollback are no-ops. Share one
    ``users`` dict between instances to simulate a single database.
    """

    def __init__(self, users: Optional[Dict[UUID, User]] = None):
        self.store = users if users is not None else {}

    async def __aenter__(self):
        self.users = InMemoryUserRepository(self.store)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        pass

    async def rollback(self):
        pass
