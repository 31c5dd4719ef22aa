"""Gift card entity and its status state machine."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum, IntEnum
from typing import List, Optional

from src.domain.exceptions import InvalidGiftCardStatusException


class GiftCardStatus(IntEnum):
    """
    Status of a gift card.

    Encoded as a small integer at every boundary (API, database).
    PENDING is the initial state; ACCEPTED and REJECTED are terminal.
    """

    ACCEPTED = 0
    REJECTED = 1
    PENDING = 2

    @classmethod
    def is_valid(cls, value: int) -> bool:
        """Check whether a raw integer maps to a known status."""
        return value in cls._value2member_map_

    @classmethod
    def parse(cls, value: "int | GiftCardStatus") -> "GiftCardStatus":
        """
        Convert a raw status value into a GiftCardStatus.

        Raises:
            InvalidGiftCardStatusException: If the value is not a known status
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidGiftCardStatusException(value)
        if not cls.is_valid(value):
            raise InvalidGiftCardStatusException(value)
        return cls(value)


class GiftCardRole(str, Enum):
    """Relationship of an account to a gift card."""

    SENDER = "sender"
    RECEIVER = "receiver"


@dataclass
class GiftCard:
    """
    A monetary credit offered by a sender to a receiver.

    Only ``status`` and ``updated_at`` change after creation.
    The id is assigned by the repository when the card is persisted.
    """

    amount: Decimal
    sender_id: int
    receiver_id: int
    status: GiftCardStatus = GiftCardStatus.PENDING
    id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def can_update_status(self) -> bool:
        """Only pending cards may be accepted or rejected."""
        return self.status == GiftCardStatus.PENDING

    def is_receiver(self, account_id: int) -> bool:
        return self.receiver_id == account_id

    def is_participant(self, account_id: int) -> bool:
        return account_id in (self.sender_id, self.receiver_id)

    def mark_status(self, status: GiftCardStatus, updated_at: Optional[datetime] = None) -> None:
        """Apply a new status and advance the update timestamp."""
        self.status = status
        self.updated_at = updated_at or datetime.utcnow()


@dataclass(frozen=True)
class GiftCardPage:
    """One page of a role-scoped gift card listing."""

    gift_cards: List[GiftCard]
    total: int
    page: int
    page_size: int
