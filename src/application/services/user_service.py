"""User service - handles account registration."""

import structlog

from src.application.dto import RegisterUserRequest, UserResponse
from src.core.security import PasswordHasher
from src.domain.entities import User
from src.domain.exceptions import InvalidUserRequestException
from src.domain.interfaces import UserRepository

logger = structlog.get_logger(__name__)


class UserService:
    """Application service for user registration."""

    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher):
        self._user_repo = user_repository
        self._hasher = password_hasher

    async def register(self, request: RegisterUserRequest) -> UserResponse:
        """
        Register a new user.

        Raises:
            InvalidUserRequestException: If email or password is invalid
            UserAlreadyExistsException: If the email is already registered
            StorageException: If the user could not be persisted
        """
        errors = request.validate()
        if errors:
            raise InvalidUserRequestException("; ".join(errors))

        user = User(
            email=request.email.strip().lower(),
            password_hash=self._hasher.hash(request.password),
        )
        await self._user_repo.create(user)

        logger.info("user_registered", user_id=user.id)

        return UserResponse.from_entity(user)
