"""
Get Current User Use Case

Loads the user named by a verified access token.
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserView
from src.libs.result import Error, Result, Return


class GetCurrentUserUseCase:
    """
    Use case for loading the caller's own user view.

    Business Rules:
    - Access token claims provide the user id (already verified upstream)
    - User must still exist
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserView]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)

            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(UserView.from_user(user))
