"""PostgreSQL implementation of GiftCardRepository."""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import GiftCard, GiftCardRole, GiftCardStatus
from src.domain.exceptions import StorageException
from src.domain.interfaces import GiftCardRepository
from src.infrastructure.database.models import GiftCardModel


class PostgresGiftCardRepository(GiftCardRepository):
    """
    PostgreSQL implementation of the GiftCard repository.

    Uses SQLAlchemy async session for database operations. Driver and
    constraint errors surface as StorageException; a missing row is
    reported as None, never as an error.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, gift_card: GiftCard) -> GiftCard:
        """Insert a new pending gift card and write back its id."""
        now = datetime.utcnow()
        model = GiftCardModel(
            amount=gift_card.amount,
            sender_id=gift_card.sender_id,
            receiver_id=gift_card.receiver_id,
            status=GiftCardStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

        try:
            self._session.add(model)
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise StorageException(f"Failed to create gift card: {exc}", "create") from exc

        gift_card.id = model.id
        gift_card.status = GiftCardStatus.PENDING
        gift_card.created_at = now
        gift_card.updated_at = now

        return gift_card

    async def get_by_id(self, gift_card_id: int) -> Optional[GiftCard]:
        """Retrieve a gift card by ID."""
        stmt = select(GiftCardModel).where(GiftCardModel.id == gift_card_id)

        try:
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StorageException(f"Failed to get gift card: {exc}", "get_by_id") from exc

        if model is None:
            return None

        return self._to_entity(model)

    async def update_status(
        self,
        gift_card_id: int,
        status: GiftCardStatus,
        updated_at: Optional[datetime] = None,
    ) -> None:
        """Set the status without checking the current one."""
        stmt = (
            update(GiftCardModel)
            .where(GiftCardModel.id == gift_card_id)
            .values(status=status.value, updated_at=updated_at or datetime.utcnow())
        )

        try:
            await self._session.execute(stmt)
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise StorageException(
                f"Failed to update gift card status: {exc}", "update_status"
            ) from exc

    async def list_by_role(
        self,
        role: GiftCardRole,
        account_id: int,
        status: Optional[GiftCardStatus],
        page_size: int,
        page_number: int,
    ) -> Tuple[List[GiftCard], int]:
        """Retrieve one page of cards for an account, ordered by id ascending."""
        if role == GiftCardRole.SENDER:
            conditions = [GiftCardModel.sender_id == account_id]
        else:
            conditions = [GiftCardModel.receiver_id == account_id]

        if status is not None:
            conditions.append(GiftCardModel.status == status.value)

        offset = (page_number - 1) * page_size

        page_stmt = (
            select(GiftCardModel)
            .where(*conditions)
            .order_by(GiftCardModel.id.asc())
            .limit(page_size)
            .offset(offset)
        )
        count_stmt = select(func.count()).select_from(GiftCardModel).where(*conditions)

        try:
            result = await self._session.execute(page_stmt)
            models = result.scalars().all()

            count_result = await self._session.execute(count_stmt)
            total = count_result.scalar_one()
        except SQLAlchemyError as exc:
            raise StorageException(f"Failed to list gift cards: {exc}", "list_by_role") from exc

        return [self._to_entity(model) for model in models], total

    def _to_entity(self, model: GiftCardModel) -> GiftCard:
        """Convert database model to domain entity."""
        if not GiftCardStatus.is_valid(model.status):
            raise StorageException(
                f"Gift card {model.id} has unknown status {model.status}", "read"
            )

        return GiftCard(
            id=model.id,
            amount=model.amount,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            status=GiftCardStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
