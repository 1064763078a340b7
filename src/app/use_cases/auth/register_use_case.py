import logging
from typing import Optional

from src.app.repositories.user_repository import DuplicateUserError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.session_store import ISessionStore
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.libs.result import Error, Result, Return
from .dtos import AuthResponse, RegisterCommand, UserView
from .validation import RegisterInput, validate_input

REFRESH_TOKEN_TTL_SECONDS = 7 * 24 * 60 * 60

USER_ALREADY_EXISTS = Error("USER_ALREADY_EXISTS", "User already exists")


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (raw registration intent)
    - Output: Result[AuthResponse] (user view + token pair)

    Business Logic:
    1. Validate every field (email, password >= 8, username alphanumeric 3-30,
       names 1-50), reporting all violations at once
    2. Check that neither email nor username is taken
    3. Hash password with bcrypt cost factor 12
    4. Create User; a unique index violation also counts as a conflict
    5. Issue token pair and store the refresh token as the user's session
    6. Return the public user view with both tokens
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_store: ISessionStore,
        token_service: TokenService,
        password_hasher: PasswordHasher,
        refresh_ttl_seconds: int = REFRESH_TOKEN_TTL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.session_store = session_store
        self.token_service = token_service
        self.password_hasher = password_hasher
        self.refresh_ttl_seconds = refresh_ttl_seconds
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with email, password, username and names

        Returns:
            Result[AuthResponse] with user view and tokens, or
            Error(VALIDATION_ERROR) / Error(USER_ALREADY_EXISTS)
        """
        validated = validate_input(RegisterInput, command.model_dump(exclude_none=True))
        if validated.is_err():
            return validated

        async with self.uow:
            existing_user = await self.uow.users.find_by_email_or_username(
                command.email, command.username
            )
            if existing_user:
                return Return.err(USER_ALREADY_EXISTS)

            user = User(
                email=command.email,
                username=command.username,
                password_hash=self.password_hasher.hash(command.password),
                first_name=command.first_name,
                last_name=command.last_name,
            )
            try:
                user = await self.uow.users.create(user)
            except DuplicateUserError:
                # Lost the race against a concurrent registration
                return Return.err(USER_ALREADY_EXISTS)

            await self.uow.commit()

            tokens = self.token_service.issue(user)
            try:
                await self.session_store.put(
                    user.id, tokens.refresh_token, self.refresh_ttl_seconds
                )
            except Exception:
                # The account is already committed; a retry will see a conflict
                self.logger.exception(
                    f"User {user.id} was created but storing its session failed"
                )
                raise

            self.logger.info(f"User registered successfully: {user.id}")

            return Return.ok(
                AuthResponse(
                    user=UserView.from_user(user),
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                )
            )
