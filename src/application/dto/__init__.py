"""Data Transfer Objects for application layer."""

from .gift_card import GiftCardListResponse, GiftCardResponse
from .user import LoginResponse, RegisterUserRequest, UserResponse

__all__ = [
    "GiftCardListResponse",
    "GiftCardResponse",
    "LoginResponse",
    "RegisterUserRequest",
    "UserResponse",
]
