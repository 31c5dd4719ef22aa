"""Auth service - exchanges credentials for an access token."""

import structlog

from src.application.dto import LoginResponse
from src.core.security import PasswordHasher, TokenService
from src.domain.exceptions import InvalidCredentialsException
from src.domain.interfaces import UserRepository

logger = structlog.get_logger(__name__)


class AuthService:
    """Application service for login."""

    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ):
        self._user_repo = user_repository
        self._hasher = password_hasher
        self._tokens = token_service

    async def login(self, email: str, password: str) -> LoginResponse:
        """
        Verify credentials and issue an access token.

        Raises:
            InvalidCredentialsException: If no user matches the credentials
            StorageException: If the lookup failed
        """
        user = await self._user_repo.get_by_email(email.strip().lower())

        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.warning("login_failed")
            raise InvalidCredentialsException()

        logger.info("user_logged_in", user_id=user.id)

        return LoginResponse(token=self._tokens.issue(user.id))
