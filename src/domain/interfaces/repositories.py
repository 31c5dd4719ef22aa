"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from src.domain.entities import GiftCard, GiftCardRole, GiftCardStatus, User


class GiftCardRepository(ABC):
    """
    Abstract repository for GiftCard persistence.

    Implementations may use PostgreSQL, in-memory storage, etc.
    Repositories own no business rules: every transition check happens
    in the service layer before a write is issued.

    Every method raises StorageException when the backing store fails.
    """

    @abstractmethod
    async def create(self, gift_card: GiftCard) -> GiftCard:
        """
        Persist a new gift card in the PENDING state.

        Args:
            gift_card: The card to persist

        Returns:
            The same card with its generated id and timestamps populated
        """
        ...

    @abstractmethod
    async def get_by_id(self, gift_card_id: int) -> Optional[GiftCard]:
        """
        Retrieve a gift card by ID.

        Args:
            gift_card_id: The card's unique identifier

        Returns:
            The gift card if found, None otherwise
        """
        ...

    @abstractmethod
    async def update_status(
        self,
        gift_card_id: int,
        status: GiftCardStatus,
        updated_at: Optional[datetime] = None,
    ) -> None:
        """
        Unconditionally set a card's status and advance updated_at.

        Args:
            gift_card_id: The card's unique identifier
            status: The new status
            updated_at: Timestamp to store, defaults to the current UTC time
        """
        ...

    @abstractmethod
    async def list_by_role(
        self,
        role: GiftCardRole,
        account_id: int,
        status: Optional[GiftCardStatus],
        page_size: int,
        page_number: int,
    ) -> Tuple[List[GiftCard], int]:
        """
        Retrieve one page of cards an account sent or received.

        Args:
            role: Whether account_id is matched against sender or receiver
            account_id: The account's identifier
            status: Optional status filter applied to page and count alike
            page_size: Maximum number of cards to return
            page_number: 1-based page number

        Returns:
            Tuple of (cards ordered by id ascending, total matching count)
        """
        ...


class UserRepository(ABC):
    """Abstract repository for User persistence."""

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Persist a new user.

        Returns:
            The same user with its generated id populated

        Raises:
            UserAlreadyExistsException: If the email is already registered
        """
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Retrieve a user by email.

        Returns:
            The user if found, None otherwise
        """
        ...
