"""Translation of domain exceptions into JSON error responses."""

from typing import Dict, Type

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.domain.exceptions import (
    DomainException,
    GiftCardAccessDeniedException,
    GiftCardAlreadyResolvedException,
    GiftCardNotFoundException,
    InvalidCredentialsException,
    InvalidGiftCardStatusException,
    InvalidTokenException,
    InvalidUserRequestException,
    StorageException,
    UserAlreadyExistsException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

# Exact classes; any other DomainException maps to 400
STATUS_CODES: Dict[Type[DomainException], int] = {
    GiftCardNotFoundException: 404,
    GiftCardAccessDeniedException: 403,
    InvalidGiftCardStatusException: 400,
    GiftCardAlreadyResolvedException: 409,
    InvalidUserRequestException: 400,
    UserAlreadyExistsException: 409,
    InvalidCredentialsException: 401,
    InvalidTokenException: 401,
}


def _body(code: str, message: str) -> dict:
    return {"error": code, "message": message, "request_id": get_request_id()}


async def handle_domain_exception(request: Request, exc: DomainException) -> JSONResponse:
    status_code = STATUS_CODES.get(type(exc))
    if status_code is None:
        logger.warning("domain_exception", code=exc.code, message=exc.message)
        status_code = 400

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, InvalidTokenException) else None

    return JSONResponse(
        status_code=status_code,
        content=_body(exc.code, exc.message),
        headers=headers,
    )


async def handle_storage_exception(request: Request, exc: StorageException) -> JSONResponse:
    # Driver messages stay in the logs
    logger.error("storage_error", operation=exc.operation, message=exc.message)
    return JSONResponse(
        status_code=500,
        content=_body(exc.code, "Unable to process request. Please try again later."),
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", error_type=type(exc).__name__)
    return JSONResponse(
        status_code=500,
        content=_body("INTERNAL_ERROR", "An unexpected error occurred."),
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Every error body has the shape {error, message, request_id}.
    """
    app.add_exception_handler(StorageException, handle_storage_exception)
    app.add_exception_handler(DomainException, handle_domain_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
