"""Gift card service - lifecycle, authorization and listing use cases."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import structlog

from src.domain.entities import GiftCard, GiftCardPage, GiftCardRole, GiftCardStatus
from src.domain.exceptions import (
    GiftCardAccessDeniedException,
    GiftCardAlreadyResolvedException,
    GiftCardNotFoundException,
    InvalidGiftCardStatusException,
)
from src.domain.interfaces import GiftCardRepository

logger = structlog.get_logger(__name__)


class GiftCardService:
    """
    Application service owning every gift card invariant.

    The service keeps no mutable state of its own: each call performs at
    most one read followed by one conditional write against the repository,
    so a single instance can be shared by concurrent requests. Account ids
    passed in are trusted; authentication happens before this layer.

    Two concurrent updates of the same card may both pass validation
    against a stale read; the repository applies them last-write-wins.
    """

    DEFAULT_PAGE_SIZE = 10

    def __init__(
        self,
        gift_card_repository: GiftCardRepository,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._gift_card_repo = gift_card_repository
        self._default_page_size = default_page_size

    async def create_gift_card(
        self,
        amount: Decimal,
        sender_id: int,
        receiver_id: int,
    ) -> GiftCard:
        """
        Create a pending gift card on behalf of a sender.

        The amount and the accounts are not validated here; callers are
        expected to check them upstream. Sending to oneself is allowed.

        Args:
            amount: Monetary value of the card
            sender_id: Account offering the card
            receiver_id: Account the card is addressed to

        Returns:
            The persisted gift card with its id assigned

        Raises:
            StorageException: If the card could not be persisted
        """
        gift_card = GiftCard(
            amount=amount,
            sender_id=sender_id,
            receiver_id=receiver_id,
            status=GiftCardStatus.PENDING,
        )
        await self._gift_card_repo.create(gift_card)

        logger.info(
            "gift_card_created",
            gift_card_id=gift_card.id,
            sender_id=sender_id,
            receiver_id=receiver_id,
            amount=str(amount),
        )
        return gift_card

    async def find_gift_card(self, gift_card_id: int) -> Optional[GiftCard]:
        """
        Look up a gift card without any ownership check.

        Returns:
            The gift card if found, None otherwise

        Raises:
            StorageException: If the lookup failed
        """
        return await self._gift_card_repo.get_by_id(gift_card_id)

    async def get_gift_card(self, gift_card_id: int, requesting_account_id: int) -> GiftCard:
        """
        Retrieve a gift card visible to the requesting account.

        Only the sender and the receiver may read a card.

        Raises:
            GiftCardNotFoundException: If the card does not exist
            GiftCardAccessDeniedException: If the caller is not a participant
            StorageException: If the lookup failed
        """
        gift_card = await self._gift_card_repo.get_by_id(gift_card_id)
        if gift_card is None:
            raise GiftCardNotFoundException(gift_card_id)

        if not gift_card.is_participant(requesting_account_id):
            logger.warning(
                "gift_card_read_forbidden",
                gift_card_id=gift_card_id,
                account_id=requesting_account_id,
            )
            raise GiftCardAccessDeniedException(gift_card_id, requesting_account_id)

        return gift_card

    async def update_status(
        self,
        gift_card_id: int,
        target_status: "int | GiftCardStatus",
        requesting_account_id: int,
    ) -> GiftCard:
        """
        Accept or reject a gift card on behalf of its receiver.

        Checks run in order: existence, receiver ownership, status validity,
        then the pending-only transition rule.

        Args:
            gift_card_id: The card to resolve
            target_status: Raw or typed status (ACCEPTED or REJECTED)
            requesting_account_id: Authenticated caller

        Returns:
            The gift card carrying its new status

        Raises:
            GiftCardNotFoundException: If the card does not exist
            GiftCardAccessDeniedException: If the caller is not the receiver
            InvalidGiftCardStatusException: If the status is unknown or PENDING
            GiftCardAlreadyResolvedException: If the card is no longer pending
            StorageException: If the read or the write failed
        """
        log = logger.bind(
            gift_card_id=gift_card_id,
            account_id=requesting_account_id,
            target_status=target_status,
        )

        gift_card = await self._gift_card_repo.get_by_id(gift_card_id)
        if gift_card is None:
            log.warning("gift_card_not_found")
            raise GiftCardNotFoundException(gift_card_id)

        if not gift_card.is_receiver(requesting_account_id):
            log.warning("gift_card_update_forbidden", receiver_id=gift_card.receiver_id)
            raise GiftCardAccessDeniedException(gift_card_id, requesting_account_id)

        status = GiftCardStatus.parse(target_status)
        if status == GiftCardStatus.PENDING:
            raise InvalidGiftCardStatusException(
                status,
                message="Gift card status can only be updated to accepted or rejected",
            )

        if not gift_card.can_update_status():
            log.warning("gift_card_already_resolved", current_status=int(gift_card.status))
            raise GiftCardAlreadyResolvedException(gift_card_id, gift_card.status)

        updated_at = datetime.utcnow()
        await self._gift_card_repo.update_status(gift_card_id, status, updated_at=updated_at)
        gift_card.mark_status(status, updated_at)

        log.info("gift_card_status_updated", status=status.name.lower())
        return gift_card

    async def list_received(
        self,
        account_id: int,
        status: "int | GiftCardStatus | None" = None,
        page_size: int | None = None,
        page_number: int | None = None,
    ) -> GiftCardPage:
        """
        List gift cards addressed to an account.

        Raises:
            InvalidGiftCardStatusException: If the status filter is unknown
            StorageException: If the query failed
        """
        return await self._list(GiftCardRole.RECEIVER, account_id, status, page_size, page_number)

    async def list_sent(
        self,
        account_id: int,
        status: "int | GiftCardStatus | None" = None,
        page_size: int | None = None,
        page_number: int | None = None,
    ) -> GiftCardPage:
        """
        List gift cards an account has sent.

        Raises:
            InvalidGiftCardStatusException: If the status filter is unknown
            StorageException: If the query failed
        """
        return await self._list(GiftCardRole.SENDER, account_id, status, page_size, page_number)

    async def _list(
        self,
        role: GiftCardRole,
        account_id: int,
        status: "int | GiftCardStatus | None",
        page_size: int | None,
        page_number: int | None,
    ) -> GiftCardPage:
        """Validate the filter and paging arguments, then query the repository."""
        status_filter = GiftCardStatus.parse(status) if status is not None else None
        size = page_size if page_size is not None and page_size >= 1 else self._default_page_size
        page = page_number if page_number is not None and page_number >= 1 else 1

        # Page and count are separate queries; total may drift under concurrent writes
        gift_cards, total = await self._gift_card_repo.list_by_role(
            role=role,
            account_id=account_id,
            status=status_filter,
            page_size=size,
            page_number=page,
        )

        logger.info(
            "gift_cards_listed",
            role=role.value,
            account_id=account_id,
            status=status_filter.name.lower() if status_filter is not None else None,
            page=page,
            count=len(gift_cards),
            total=total,
        )

        return GiftCardPage(gift_cards=gift_cards, total=total, page=page, page_size=size)
