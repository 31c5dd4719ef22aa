"""Access boundary: resolves the caller's account id from the request."""

from typing import Annotated, Optional

import structlog
from fastapi import Depends, Header

from src.core.dependencies import get_token_service
from src.core.security import TokenService
from src.domain.exceptions import InvalidTokenException

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "bearer "


def extract_token(authorization: Optional[str]) -> str:
    """Accept both a raw token and the "Bearer <token>" form."""
    if not authorization:
        raise InvalidTokenException("Missing token")

    value = authorization.strip()
    if value.lower().startswith(BEARER_PREFIX):
        value = value[len(BEARER_PREFIX):].strip()

    return value


async def get_current_account_id(
    token_service: Annotated[TokenService, Depends(get_token_service)],
    authorization: Annotated[Optional[str], Header()] = None,
) -> int:
    """
    FastAPI dependency returning the authenticated account id.

    Raises:
        InvalidTokenException: If the Authorization header is missing or invalid
    """
    account_id = token_service.verify(extract_token(authorization))
    structlog.contextvars.bind_contextvars(account_id=account_id)
    return account_id
