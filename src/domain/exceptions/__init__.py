"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .gift_card import (
    GiftCardAccessDeniedException,
    GiftCardAlreadyResolvedException,
    GiftCardNotFoundException,
    InvalidGiftCardStatusException,
)
from .storage import StorageException
from .user import (
    InvalidCredentialsException,
    InvalidTokenException,
    InvalidUserRequestException,
    UserAlreadyExistsException,
)

__all__ = [
    "DomainException",
    "GiftCardAccessDeniedException",
    "GiftCardAlreadyResolvedException",
    "GiftCardNotFoundException",
    "InvalidGiftCardStatusException",
    "StorageException",
    "InvalidCredentialsException",
    "InvalidTokenException",
    "InvalidUserRequestException",
    "UserAlreadyExistsException",
]
