"""Gift card-related Pydantic schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CreateGiftCardRequestSchema(BaseModel):
    """Schema for POST /v1/gift-cards request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "amount": "100.00",
                    "receiver_id": 2,
                }
            ]
        }
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=10,
        decimal_places=2,
        description="Monetary value of the gift card",
        examples=["100.00"],
    )
    receiver_id: int = Field(
        ...,
        ge=1,
        description="Account the gift card is addressed to",
        examples=[2],
    )


class UpdateGiftCardStatusRequestSchema(BaseModel):
    """Schema for PUT /v1/gift-cards/{id}/status request body."""

    status: int = Field(
        ...,
        description="New status: 0 = accepted, 1 = rejected",
        examples=[0],
    )


class GiftCardSchema(BaseModel):
    """Schema for a gift card in responses."""

    id: int = Field(
        ...,
        description="Gift card identifier",
        examples=[15],
    )
    amount: str = Field(
        ...,
        description="Monetary value as a decimal string",
        examples=["100.00"],
    )
    status: int = Field(
        ...,
        ge=0,
        le=2,
        description="0 = accepted, 1 = rejected, 2 = pending",
        examples=[2],
    )
    sender_id: int = Field(
        ...,
        description="Account that sent the card",
    )
    receiver_id: int = Field(
        ...,
        description="Account the card is addressed to",
    )
    created_at: str = Field(
        ...,
        description="ISO 8601 creation timestamp",
    )
    updated_at: str = Field(
        ...,
        description="ISO 8601 timestamp of the last status change",
    )


class GiftCardListResponseSchema(BaseModel):
    """Schema for GET /v1/gift-cards/received and /sent responses."""

    gift_cards: list[GiftCardSchema] = Field(
        ...,
        description="Cards on the requested page, ordered by id",
    )
    total: int = Field(
        ...,
        ge=0,
        description="Number of cards matching the query across all pages",
    )
    page: int = Field(
        ...,
        ge=1,
        description="1-based page number",
    )
    page_size: int = Field(
        ...,
        ge=1,
        description="Maximum number of cards per page",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "gift_cards": [
                        {
                            "id": 15,
                            "amount": "100.00",
                            "status": 0,
                            "sender_id": 1,
                            "receiver_id": 2,
                            "created_at": "2025-09-17T12:00:00Z",
                            "updated_at": "2025-09-18T08:30:00Z",
                        }
                    ],
                    "total": 1,
                    "page": 1,
                    "page_size": 10,
                }
            ]
        }
    )
