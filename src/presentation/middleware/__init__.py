"""Middleware for request processing."""

from .auth import get_current_account_id
from .error_handler import error_handler_middleware
from .request_context import RequestContextMiddleware
from .logging import LoggingMiddleware

__all__ = [
    "get_current_account_id",
    "error_handler_middleware",
    "RequestContextMiddleware",
    "LoggingMiddleware",
]
