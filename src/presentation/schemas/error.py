"""Error response body shared by every failing endpoint."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponseSchema(BaseModel):
    """Body returned with every 4xx/5xx produced by a domain exception."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error": "GIFT_CARD_ALREADY_RESOLVED",
                    "message": "Gift card 15 is already resolved (status 0)",
                    "request_id": "3f2b9c0e6d1a4e8f9b7c5a2d1e0f4b6a",
                }
            ]
        }
    )

    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable explanation")
    request_id: Optional[str] = Field(
        default=None,
        description="Correlation id, also sent as the X-Request-ID header",
    )
