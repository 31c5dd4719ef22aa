"""Gift card API endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query

from src.application.dto import GiftCardListResponse, GiftCardResponse
from src.application.services import GiftCardService
from src.core.dependencies import get_gift_card_service
from src.core.metrics import (
    record_gift_card_created,
    record_gift_card_list,
    record_gift_card_resolved,
    record_status_update_rejected,
    track_status_update_latency,
)
from src.domain.entities import GiftCardRole
from src.domain.exceptions import DomainException
from src.presentation.middleware import get_current_account_id
from src.presentation.schemas import (
    CreateGiftCardRequestSchema,
    ErrorResponseSchema,
    GiftCardListResponseSchema,
    GiftCardSchema,
    UpdateGiftCardStatusRequestSchema,
)

gift_card_router = APIRouter(
    prefix="/gift-cards",
    responses={
        401: {"model": ErrorResponseSchema, "description": "Missing or invalid token"},
        500: {"model": ErrorResponseSchema, "description": "Storage failure"},
    },
)

StatusFilter = Annotated[
    Optional[int],
    Query(description="Only return cards in this status (0, 1 or 2)"),
]
PageNumber = Annotated[
    int,
    Query(description="1-based page number; values below 1 mean the first page"),
]


def _to_schema(response: GiftCardResponse) -> GiftCardSchema:
    return GiftCardSchema(
        id=response.id,
        amount=response.amount,
        status=response.status,
        sender_id=response.sender_id,
        receiver_id=response.receiver_id,
        created_at=response.created_at,
        updated_at=response.updated_at,
    )


def _to_list_schema(response: GiftCardListResponse) -> GiftCardListResponseSchema:
    return GiftCardListResponseSchema(
        gift_cards=[_to_schema(card) for card in response.gift_cards],
        total=response.total,
        page=response.page,
        page_size=response.page_size,
    )


@gift_card_router.post(
    "",
    response_model=GiftCardSchema,
    status_code=201,
    summary="Send Gift Card",
    description="Create a pending gift card from the caller to another account.",
)
async def create_gift_card(
    request: CreateGiftCardRequestSchema,
    account_id: Annotated[int, Depends(get_current_account_id)],
    gift_card_service: Annotated[GiftCardService, Depends(get_gift_card_service)],
) -> GiftCardSchema:
    gift_card = await gift_card_service.create_gift_card(
        amount=request.amount,
        sender_id=account_id,
        receiver_id=request.receiver_id,
    )

    record_gift_card_created(gift_card.amount)

    return _to_schema(GiftCardResponse.from_entity(gift_card))


@gift_card_router.get(
    "/received",
    response_model=GiftCardListResponseSchema,
    summary="List Received Gift Cards",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid status filter"},
    },
)
async def list_received_gift_cards(
    account_id: Annotated[int, Depends(get_current_account_id)],
    gift_card_service: Annotated[GiftCardService, Depends(get_gift_card_service)],
    status: StatusFilter = None,
    page: PageNumber = 1,
) -> GiftCardListResponseSchema:
    """List gift cards addressed to the caller, one page at a time."""
    result = await gift_card_service.list_received(account_id, status=status, page_number=page)

    record_gift_card_list(GiftCardRole.RECEIVER.value)

    return _to_list_schema(GiftCardListResponse.from_page(result))


@gift_card_router.get(
    "/sent",
    response_model=GiftCardListResponseSchema,
    summary="List Sent Gift Cards",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid status filter"},
    },
)
async def list_sent_gift_cards(
    account_id: Annotated[int, Depends(get_current_account_id)],
    gift_card_service: Annotated[GiftCardService, Depends(get_gift_card_service)],
    status: StatusFilter = None,
    page: PageNumber = 1,
) -> GiftCardListResponseSchema:
    """List gift cards the caller has sent, one page at a time."""
    result = await gift_card_service.list_sent(account_id, status=status, page_number=page)

    record_gift_card_list(GiftCardRole.SENDER.value)

    return _to_list_schema(GiftCardListResponse.from_page(result))


@gift_card_router.get(
    "/{gift_card_id}",
    response_model=GiftCardSchema,
    summary="Get Gift Card",
    description="Retrieve a gift card the caller sent or received.",
    responses={
        403: {"model": ErrorResponseSchema, "description": "Caller is not a participant"},
        404: {"model": ErrorResponseSchema, "description": "Gift card not found"},
    },
)
async def get_gift_card(
    gift_card_id: Annotated[int, Path(description="Gift card identifier")],
    account_id: Annotated[int, Depends(get_current_account_id)],
    gift_card_service: Annotated[GiftCardService, Depends(get_gift_card_service)],
) -> GiftCardSchema:
    gift_card = await gift_card_service.get_gift_card(gift_card_id, account_id)

    return _to_schema(GiftCardResponse.from_entity(gift_card))


@gift_card_router.put(
    "/{gift_card_id}/status",
    response_model=GiftCardSchema,
    summary="Accept or Reject Gift Card",
    description="""
    Resolve a pending gift card. Only the receiver may do this, and only
    once: accepted and rejected cards cannot change again.
    """,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid status"},
        403: {"model": ErrorResponseSchema, "description": "Caller is not the receiver"},
        404: {"model": ErrorResponseSchema, "description": "Gift card not found"},
        409: {"model": ErrorResponseSchema, "description": "Gift card already resolved"},
    },
)
async def update_gift_card_status(
    gift_card_id: Annotated[int, Path(description="Gift card identifier")],
    request: UpdateGiftCardStatusRequestSchema,
    account_id: Annotated[int, Depends(get_current_account_id)],
    gift_card_service: Annotated[GiftCardService, Depends(get_gift_card_service)],
) -> GiftCardSchema:
    try:
        with track_status_update_latency():
            gift_card = await gift_card_service.update_status(
                gift_card_id,
                request.status,
                account_id,
            )
    except DomainException as exc:
        record_status_update_rejected(exc.code)
        raise

    record_gift_card_resolved(gift_card.status.name)

    return _to_schema(GiftCardResponse.from_entity(gift_card))
