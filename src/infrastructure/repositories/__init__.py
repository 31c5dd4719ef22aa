"""Repository implementations."""

from .gift_card_repository import PostgresGiftCardRepository
from .in_memory import InMemoryGiftCardRepository, InMemoryUserRepository
from .user_repository import PostgresUserRepository

__all__ = [
    "PostgresGiftCardRepository",
    "PostgresUserRepository",
    "InMemoryGiftCardRepository",
    "InMemoryUserRepository",
]
