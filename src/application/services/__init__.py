"""Application services (use cases)."""

from .auth_service import AuthService
from .gift_card_service import GiftCardService
from .user_service import UserService

__all__ = [
    "AuthService",
    "GiftCardService",
    "UserService",
]
