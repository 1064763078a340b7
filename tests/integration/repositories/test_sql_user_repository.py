import pytest

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.repositories.user_repository import DuplicateUserError
from src.domain.entities import User


def new_user(**overrides) -> User:
    fields = {
        "email": "a@x.com",
        "username": "abc",
        "first_name": "A",
        "last_name": "B",
        "password_hash": "$2b$04$" + "x" * 53,
    }
    fields.update(overrides)
    return User(**fields)


@pytest.mark.asyncio
async def test_create_and_find(db_session):
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        user = await uow.users.create(new_user())
        await uow.commit()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        assert (await uow.users.get_by_id(user.id)).email == "a@x.com"
        assert (await uow.users.get_by_email("a@x.com")).id == user.id
        assert await uow.users.get_by_email("A@X.COM") is None
        assert (await uow.users.find_by_email_or_username("zzz@x.com", "abc")).id == user.id
        assert await uow.users.find_by_email_or_username("zzz@x.com", "zzz") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [{"username": "other"}, {"email": "other@x.com"}],
)
async def test_unique_indexes_reject_duplicates(db_session, overrides):
    """The database, not the pre-check, is the final word on uniqueness"""
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        await uow.users.create(new_user())
        await uow.commit()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        with pytest.raises(DuplicateUserError):
            await uow.users.create(new_user(**overrides))


@pytest.mark.asyncio
async def test_update_sets_updated_at(db_session):
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        user = await uow.users.create(new_user())
        created = user.updated_at
        user.first_name = "Changed"
        user = await uow.users.update(user)
        await uow.commit()

    assert user.first_name == "Changed"
    assert user.updated_at >= created
