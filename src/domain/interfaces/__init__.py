"""
Domain Interfaces (Ports)
"""

from .repositories import GiftCardRepository, UserRepository

__all__ = [
    "GiftCardRepository",
    "UserRepository",
]
