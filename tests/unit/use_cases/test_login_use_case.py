from unittest.mock import MagicMock

import pytest

from src.app.use_cases.auth import LoginCommand, LoginUseCase


@pytest.fixture
def use_case(mock_uow, session_store, token_service, password_hasher):
    return LoginUseCase(mock_uow, session_store, token_service, password_hasher)


@pytest.mark.asyncio
async def test_successful_login(use_case, mock_uow, session_store, make_user):
    """Test successful login flow"""
    # Arrange
    user = make_user(password="longenough1")
    mock_uow.users.get_by_email.return_value = user

    # Act
    result = await use_case.execute(LoginCommand(email="a@x.com", password="longenough1"))

    # Assert
    assert result.is_ok()
    data = result.value
    assert data.user.id == str(user.id)
    assert data.user.username == "abc"
    assert data.access_token
    assert data.refresh_token
    assert await session_store.get(user.id) == data.refresh_token

    # last_login_at recorded and persisted
    assert user.last_login_at is not None
    mock_uow.users.get_by_email.assert_called_once_with("a@x.com")
    mock_uow.users.update.assert_called_once_with(user)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_login_replaces_previous_refresh_token(use_case, mock_uow, session_store, make_user):
    user = make_user()
    mock_uow.users.get_by_email.return_value = user
    await session_store.put(user.id, "previous-refresh-token", 60)

    result = await use_case.execute(LoginCommand(email="a@x.com", password="longenough1"))

    assert result.is_ok()
    stored = await session_store.get(user.id)
    assert stored == result.value.refresh_token
    assert stored != "previous-refresh-token"


@pytest.mark.asyncio
async def test_login_invalid_credentials_wrong_password(use_case, mock_uow, session_store, make_user):
    """Test login with wrong password"""
    user = make_user(password="longenough1")
    mock_uow.users.get_by_email.return_value = user

    result = await use_case.execute(LoginCommand(email="a@x.com", password="WrongPassword!"))

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Invalid credentials"

    # Verify no session created
    assert await session_store.get(user.id) is None
    assert user.last_login_at is None
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_login_invalid_credentials_nonexistent_user(use_case, mock_uow):
    """Unknown email - same error as wrong password"""
    mock_uow.users.get_by_email.return_value = None

    result = await use_case.execute(
        LoginCommand(email="nobody@x.com", password="SomePassword!")
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_login_errors_are_indistinguishable(use_case, mock_uow, make_user):
    mock_uow.users.get_by_email.return_value = make_user()
    wrong_password = await use_case.execute(
        LoginCommand(email="a@x.com", password="WrongPassword!")
    )

    mock_uow.users.get_by_email.return_value = None
    unknown_email = await use_case.execute(
        LoginCommand(email="nobody@x.com", password="WrongPassword!")
    )

    assert wrong_password.error == unknown_email.error


@pytest.mark.asyncio
async def test_login_unknown_email_still_hashes(mock_uow, session_store, token_service):
    hasher = MagicMock()
    use_case = LoginUseCase(mock_uow, session_store, token_service, hasher)

    await use_case.execute(LoginCommand(email="nobody@x.com", password="SomePassword!"))

    hasher.burn.assert_called_once_with("SomePassword!")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "command, field",
    [
        (LoginCommand(email="not-an-email", password="longenough1"), "email"),
        (LoginCommand(email="a@x.com", password=""), "password"),
        (LoginCommand(email="a@x.com"), "password"),
        (LoginCommand(password="longenough1"), "email"),
    ],
)
async def test_login_validation(use_case, mock_uow, command, field):
    result = await use_case.execute(command)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert [detail["field"] for detail in result.error.details] == [field]
    mock_uow.users.get_by_email.assert_not_called()
