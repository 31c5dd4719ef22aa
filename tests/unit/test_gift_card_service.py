"""
Unit tests for GiftCardService.

These tests verify:
1. Creation yields pending cards with distinct ids
2. Only the receiver can accept or reject, and only once
3. Unknown cards and unknown statuses are reported
4. Role-scoped listing with filters and pagination
5. Storage failures propagate unchanged

Every test runs the service against the in-memory repository.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

import pytest

from src.application.services import GiftCardService
from src.domain.entities import GiftCard, GiftCardRole, GiftCardStatus
from src.domain.exceptions import (
    GiftCardAccessDeniedException,
    GiftCardAlreadyResolvedException,
    GiftCardNotFoundException,
    InvalidGiftCardStatusException,
    StorageException,
)
from src.domain.interfaces import GiftCardRepository
from src.infrastructure.repositories import InMemoryGiftCardRepository

SENDER = 1
RECEIVER = 2
STRANGER = 3


# =============================================================================
# Test Fixtures
# =============================================================================

class FailingGiftCardRepository(GiftCardRepository):
    """Repository whose every call fails."""

    async def create(self, gift_card: GiftCard) -> GiftCard:
        raise StorageException("connection refused", "create")

    async def get_by_id(self, gift_card_id: int) -> Optional[GiftCard]:
        raise StorageException("connection refused", "get_by_id")

    async def update_status(
        self,
        gift_card_id: int,
        status: GiftCardStatus,
        updated_at: Optional[datetime] = None,
    ) -> None:
        raise StorageException("connection refused", "update_status")

    async def list_by_role(
        self,
        role: GiftCardRole,
        account_id: int,
        status: Optional[GiftCardStatus],
        page_size: int,
        page_number: int,
    ) -> Tuple[List[GiftCard], int]:
        raise StorageException("connection refused", "list_by_role")


class RecordingGiftCardRepository(InMemoryGiftCardRepository):
    """In-memory repository that remembers list_by_role arguments."""

    def __init__(self):
        super().__init__()
        self.list_calls = []

    async def list_by_role(self, role, account_id, status, page_size, page_number):
        self.list_calls.append(
            {
                "role": role,
                "account_id": account_id,
                "status": status,
                "page_size": page_size,
                "page_number": page_number,
            }
        )
        return await super().list_by_role(role, account_id, status, page_size, page_number)


@pytest.fixture
def repository() -> RecordingGiftCardRepository:
    return RecordingGiftCardRepository()


@pytest.fixture
def service(repository) -> GiftCardService:
    return GiftCardService(gift_card_repository=repository)


async def seed_card(
    repository: InMemoryGiftCardRepository,
    receiver_id: int,
    status: GiftCardStatus,
    sender_id: int = SENDER,
) -> GiftCard:
    """Insert a card and force its status directly through the repository."""
    card = await repository.create(
        GiftCard(amount=Decimal("100"), sender_id=sender_id, receiver_id=receiver_id)
    )
    await repository.update_status(card.id, status)
    return card


# =============================================================================
# Creation
# =============================================================================

class TestCreateGiftCard:
    """Tests for create_gift_card."""

    @pytest.mark.asyncio
    async def test_created_card_is_pending_with_id(self, service):
        card = await service.create_gift_card(Decimal("50.00"), SENDER, RECEIVER)

        assert card.id is not None
        assert card.status == GiftCardStatus.PENDING
        assert card.amount == Decimal("50.00")
        assert card.sender_id == SENDER
        assert card.receiver_id == RECEIVER

    @pytest.mark.asyncio
    async def test_created_ids_are_distinct(self, service):
        first = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)
        second = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_self_gifting_is_allowed(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, SENDER)

        assert card.sender_id == card.receiver_id == SENDER

    @pytest.mark.asyncio
    async def test_created_card_is_retrievable(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        found = await service.find_gift_card(card.id)

        assert found is not None
        assert found.id == card.id
        assert found.status == GiftCardStatus.PENDING


# =============================================================================
# Lookup
# =============================================================================

class TestFindGiftCard:
    """Tests for find_gift_card and get_gift_card."""

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, service):
        assert await service.find_gift_card(404) is None

    @pytest.mark.asyncio
    async def test_find_is_idempotent(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        first = await service.find_gift_card(card.id)
        second = await service.find_gift_card(card.id)

        assert first == second

    @pytest.mark.asyncio
    async def test_get_allows_sender_and_receiver(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        assert (await service.get_gift_card(card.id, SENDER)).id == card.id
        assert (await service.get_gift_card(card.id, RECEIVER)).id == card.id

    @pytest.mark.asyncio
    async def test_get_denies_stranger(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        with pytest.raises(GiftCardAccessDeniedException):
            await service.get_gift_card(card.id, STRANGER)

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, service):
        with pytest.raises(GiftCardNotFoundException):
            await service.get_gift_card(404, SENDER)


# =============================================================================
# Status updates
# =============================================================================

class TestUpdateStatus:
    """Tests for update_status."""

    @pytest.mark.asyncio
    async def test_receiver_accepts(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        updated = await service.update_status(card.id, GiftCardStatus.ACCEPTED, RECEIVER)

        assert updated.status == GiftCardStatus.ACCEPTED
        assert (await service.find_gift_card(card.id)).status == GiftCardStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_receiver_rejects_with_raw_value(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        updated = await service.update_status(card.id, 1, RECEIVER)

        assert updated.status == GiftCardStatus.REJECTED

    @pytest.mark.asyncio
    async def test_sender_cannot_update(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        with pytest.raises(GiftCardAccessDeniedException):
            await service.update_status(card.id, GiftCardStatus.ACCEPTED, SENDER)

        assert (await service.find_gift_card(card.id)).status == GiftCardStatus.PENDING

    @pytest.mark.asyncio
    async def test_missing_card_raises_not_found(self, service):
        with pytest.raises(GiftCardNotFoundException) as exc_info:
            await service.update_status(999, GiftCardStatus.ACCEPTED, RECEIVER)

        assert exc_info.value.gift_card_id == 999

    @pytest.mark.asyncio
    async def test_unknown_status_is_rejected(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        with pytest.raises(InvalidGiftCardStatusException):
            await service.update_status(card.id, 99, RECEIVER)

        assert (await service.find_gift_card(card.id)).status == GiftCardStatus.PENDING

    @pytest.mark.asyncio
    async def test_pending_target_is_rejected(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        with pytest.raises(InvalidGiftCardStatusException):
            await service.update_status(card.id, GiftCardStatus.PENDING, RECEIVER)

    @pytest.mark.asyncio
    async def test_ownership_checked_before_status(self, service):
        """A stranger sending a bad status learns nothing about the card."""
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        with pytest.raises(GiftCardAccessDeniedException):
            await service.update_status(card.id, 99, STRANGER)

    @pytest.mark.asyncio
    async def test_resolved_card_cannot_change_again(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)
        await service.update_status(card.id, GiftCardStatus.ACCEPTED, RECEIVER)

        with pytest.raises(GiftCardAlreadyResolvedException) as exc_info:
            await service.update_status(card.id, GiftCardStatus.REJECTED, RECEIVER)

        assert exc_info.value.current_status == GiftCardStatus.ACCEPTED
        assert (await service.find_gift_card(card.id)).status == GiftCardStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_update_advances_updated_at(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        updated = await service.update_status(card.id, GiftCardStatus.ACCEPTED, RECEIVER)

        assert updated.updated_at >= card.updated_at
        assert updated.created_at == card.created_at

    @pytest.mark.asyncio
    async def test_returned_timestamp_matches_stored(self, service):
        card = await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        updated = await service.update_status(card.id, GiftCardStatus.REJECTED, RECEIVER)
        stored = await service.find_gift_card(card.id)

        assert updated.updated_at == stored.updated_at
        assert updated == stored


# =============================================================================
# Listing
# =============================================================================

class TestListGiftCards:
    """Tests for list_received and list_sent."""

    @pytest.mark.asyncio
    async def test_seeded_statuses_filter_independently(self, service, repository):
        """Two accepted and two rejected cards for receiver 1 split cleanly by filter."""
        accepted = [await seed_card(repository, 1, GiftCardStatus.ACCEPTED) for _ in range(2)]
        rejected = [await seed_card(repository, 1, GiftCardStatus.REJECTED) for _ in range(2)]

        accepted_page = await service.list_received(1, GiftCardStatus.ACCEPTED, 10, 1)
        rejected_page = await service.list_received(1, GiftCardStatus.REJECTED, 10, 1)

        assert accepted_page.total == 2
        assert [c.id for c in accepted_page.gift_cards] == [c.id for c in accepted]
        assert rejected_page.total == 2
        assert [c.id for c in rejected_page.gift_cards] == [c.id for c in rejected]

    @pytest.mark.asyncio
    async def test_unfiltered_list_spans_all_statuses(self, service, repository):
        await seed_card(repository, RECEIVER, GiftCardStatus.ACCEPTED)
        await seed_card(repository, RECEIVER, GiftCardStatus.REJECTED)
        await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)
        await service.create_gift_card(Decimal("10"), SENDER, STRANGER)

        page = await service.list_received(RECEIVER)

        assert page.total == 3
        assert {c.status for c in page.gift_cards} == set(GiftCardStatus)
        assert all(c.receiver_id == RECEIVER for c in page.gift_cards)

    @pytest.mark.asyncio
    async def test_total_counts_beyond_page(self, service):
        for _ in range(5):
            await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        page = await service.list_received(RECEIVER, page_size=2, page_number=3)

        assert page.total == 5
        assert len(page.gift_cards) == 1
        assert page.page == 3
        assert page.page_size == 2

    @pytest.mark.asyncio
    async def test_pages_are_ordered_by_id(self, service):
        ids = [
            (await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)).id
            for _ in range(4)
        ]

        first = await service.list_received(RECEIVER, page_size=2, page_number=1)
        second = await service.list_received(RECEIVER, page_size=2, page_number=2)

        assert [c.id for c in first.gift_cards + second.gift_cards] == ids

    @pytest.mark.asyncio
    async def test_list_sent_scopes_by_sender(self, service):
        await service.create_gift_card(Decimal("10"), SENDER, RECEIVER)
        await service.create_gift_card(Decimal("10"), STRANGER, RECEIVER)

        page = await service.list_sent(SENDER)

        assert page.total == 1
        assert page.gift_cards[0].sender_id == SENDER

    @pytest.mark.asyncio
    async def test_invalid_filter_never_reaches_store(self, service, repository):
        with pytest.raises(InvalidGiftCardStatusException):
            await service.list_received(RECEIVER, status=7)

        assert repository.list_calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_number", [None, 0, -3])
    async def test_page_number_below_one_means_first_page(
        self, service, repository, page_number
    ):
        page = await service.list_sent(SENDER, page_number=page_number)

        assert page.page == 1
        assert repository.list_calls[-1]["page_number"] == 1

    @pytest.mark.asyncio
    async def test_page_size_falls_back_to_default(self, repository):
        service = GiftCardService(gift_card_repository=repository, default_page_size=3)

        page = await service.list_received(RECEIVER, page_size=0)

        assert page.page_size == 3
        assert repository.list_calls[-1]["page_size"] == 3
        assert repository.list_calls[-1]["role"] == GiftCardRole.RECEIVER


# =============================================================================
# Storage failures
# =============================================================================

class TestStorageFailures:
    """Storage errors surface unchanged from every operation."""

    @pytest.fixture
    def failing_service(self) -> GiftCardService:
        return GiftCardService(gift_card_repository=FailingGiftCardRepository())

    @pytest.mark.asyncio
    async def test_create_propagates(self, failing_service):
        with pytest.raises(StorageException) as exc_info:
            await failing_service.create_gift_card(Decimal("10"), SENDER, RECEIVER)

        assert exc_info.value.operation == "create"

    @pytest.mark.asyncio
    async def test_find_propagates(self, failing_service):
        with pytest.raises(StorageException):
            await failing_service.find_gift_card(1)

    @pytest.mark.asyncio
    async def test_update_propagates(self, failing_service):
        with pytest.raises(StorageException):
            await failing_service.update_status(1, GiftCardStatus.ACCEPTED, RECEIVER)

    @pytest.mark.asyncio
    async def test_list_propagates(self, failing_service):
        with pytest.raises(StorageException):
            await failing_service.list_sent(SENDER)
