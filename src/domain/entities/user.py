"""User entity representing a registered account."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """
    A registered account that can send and receive gift cards.

    The id doubles as the account identifier on gift cards.
    Only the password hash is ever stored.
    """

    email: str
    password_hash: str
    id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
