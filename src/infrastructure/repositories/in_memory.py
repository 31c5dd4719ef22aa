"""In-memory repository implementations for tests and local tooling."""

import itertools
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from src.domain.entities import GiftCard, GiftCardRole, GiftCardStatus, User
from src.domain.exceptions import UserAlreadyExistsException
from src.domain.interfaces import GiftCardRepository, UserRepository


class InMemoryGiftCardRepository(GiftCardRepository):
    """
    Dict-backed gift card repository.

    Stored cards are copies, so callers mutating a returned entity do
    not change what is stored.
    """

    def __init__(self):
        self._rows: Dict[int, GiftCard] = {}
        self._ids = itertools.count(1)

    async def create(self, gift_card: GiftCard) -> GiftCard:
        now = datetime.utcnow()
        gift_card.id = next(self._ids)
        gift_card.status = GiftCardStatus.PENDING
        gift_card.created_at = now
        gift_card.updated_at = now

        self._rows[gift_card.id] = replace(gift_card)

        return gift_card

    async def get_by_id(self, gift_card_id: int) -> Optional[GiftCard]:
        row = self._rows.get(gift_card_id)
        return replace(row) if row is not None else None

    async def update_status(
        self,
        gift_card_id: int,
        status: GiftCardStatus,
        updated_at: Optional[datetime] = None,
    ) -> None:
        row = self._rows.get(gift_card_id)
        if row is not None:
            row.mark_status(status, updated_at)

    async def list_by_role(
        self,
        role: GiftCardRole,
        account_id: int,
        status: Optional[GiftCardStatus],
        page_size: int,
        page_number: int,
    ) -> Tuple[List[GiftCard], int]:
        def matches(card: GiftCard) -> bool:
            owner = card.sender_id if role == GiftCardRole.SENDER else card.receiver_id
            return owner == account_id and (status is None or card.status == status)

        matching = [card for _, card in sorted(self._rows.items()) if matches(card)]
        offset = (page_number - 1) * page_size

        return [replace(card) for card in matching[offset:offset + page_size]], len(matching)


class InMemoryUserRepository(UserRepository):
    """Dict-backed user repository keyed by email."""

    def __init__(self):
        self._rows: Dict[str, User] = {}
        self._ids = itertools.count(1)

    async def create(self, user: User) -> User:
        if user.email in self._rows:
            raise UserAlreadyExistsException(user.email)

        user.id = next(self._ids)
        self._rows[user.email] = replace(user)

        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        row = self._rows.get(email)
        return replace(row) if row is not None else None
