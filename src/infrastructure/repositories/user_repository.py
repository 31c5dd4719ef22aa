"""PostgreSQL implementation of UserRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import User
from src.domain.exceptions import StorageException, UserAlreadyExistsException
from src.domain.interfaces import UserRepository
from src.infrastructure.database.models import UserModel


class PostgresUserRepository(UserRepository):
    """PostgreSQL-backed user repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, user: User) -> User:
        if await self.get_by_email(user.email) is not None:
            raise UserAlreadyExistsException(user.email)

        model = UserModel(
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at,
            updated_at=datetime.utcnow(),
        )

        try:
            self._session.add(model)
            await self._session.flush()
        except IntegrityError as exc:
            # Concurrent registration of the same email
            await self._session.rollback()
            raise UserAlreadyExistsException(user.email) from exc
        except SQLAlchemyError as exc:
            raise StorageException(f"Failed to create user: {exc}", "create") from exc

        user.id = model.id

        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email)

        try:
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StorageException(f"Failed to get user: {exc}", "get_by_email") from exc

        if model is None:
            return None

        return User(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            created_at=model.created_at,
        )
