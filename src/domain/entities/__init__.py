"""Domain Entities - Core business objects."""

from .gift_card import GiftCard, GiftCardPage, GiftCardRole, GiftCardStatus
from .user import User

__all__ = [
    "GiftCard",
    "GiftCardPage",
    "GiftCardRole",
    "GiftCardStatus",
    "User",
]
