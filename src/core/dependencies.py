"""Dependency injection for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.services import AuthService, GiftCardService, UserService
from src.core.config import settings
from src.core.security import PasswordHasher, TokenService
from src.domain.interfaces import GiftCardRepository, UserRepository
from src.infrastructure.database import get_db_session
from src.infrastructure.repositories import (
    PostgresGiftCardRepository,
    PostgresUserRepository,
)


# Repository dependencies
async def get_gift_card_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> GiftCardRepository:
    """Get a GiftCardRepository instance."""
    return PostgresGiftCardRepository(session)


async def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserRepository:
    """Get a UserRepository instance."""
    return PostgresUserRepository(session)


# Security dependencies
@lru_cache
def get_token_service() -> TokenService:
    """Get a TokenService built from the configured signing key."""
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_hours=settings.jwt_expire_hours,
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Get a PasswordHasher instance."""
    return PasswordHasher()


# Service dependencies
async def get_gift_card_service(
    gift_card_repo: Annotated[GiftCardRepository, Depends(get_gift_card_repository)],
) -> GiftCardService:
    """Get a GiftCardService instance."""
    return GiftCardService(
        gift_card_repository=gift_card_repo,
        default_page_size=settings.gift_card_page_size,
    )


async def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> UserService:
    """Get a UserService instance."""
    return UserService(user_repository=user_repo, password_hasher=password_hasher)


async def get_auth_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    """Get an AuthService instance."""
    return AuthService(
        user_repository=user_repo,
        password_hasher=password_hasher,
        token_service=token_service,
    )
