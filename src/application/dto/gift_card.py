"""Data transfer objects for gift card operations."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import List

CENTS = Decimal("0.01")


def _format_timestamp(value: datetime) -> str:
    """Render a timestamp as naive UTC ISO-8601 with a trailing Z."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + "Z"


@dataclass(frozen=True)
class GiftCardResponse:
    """Response data for a single gift card."""

    id: int
    amount: str
    status: int
    sender_id: int
    receiver_id: int
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, gift_card) -> "GiftCardResponse":
        return cls(
            id=gift_card.id,
            amount=str(Decimal(gift_card.amount).quantize(CENTS)),
            status=int(gift_card.status),
            sender_id=gift_card.sender_id,
            receiver_id=gift_card.receiver_id,
            created_at=_format_timestamp(gift_card.created_at),
            updated_at=_format_timestamp(gift_card.updated_at),
        )


@dataclass(frozen=True)
class GiftCardListResponse:
    """One page of gift cards plus the total matching count."""

    gift_cards: List[GiftCardResponse]
    total: int
    page: int
    page_size: int

    @classmethod
    def from_page(cls, page) -> "GiftCardListResponse":
        return cls(
            gift_cards=[GiftCardResponse.from_entity(card) for card in page.gift_cards],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
        )
