"""Pydantic schemas for API request/response validation."""

from .gift_card import (
    CreateGiftCardRequestSchema,
    GiftCardListResponseSchema,
    GiftCardSchema,
    UpdateGiftCardStatusRequestSchema,
)
from .user import (
    LoginRequestSchema,
    LoginResponseSchema,
    RegisterUserRequestSchema,
    UserSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "CreateGiftCardRequestSchema",
    "GiftCardListResponseSchema",
    "GiftCardSchema",
    "UpdateGiftCardStatusRequestSchema",
    "LoginRequestSchema",
    "LoginResponseSchema",
    "RegisterUserRequestSchema",
    "UserSchema",
    "ErrorResponseSchema",
]
