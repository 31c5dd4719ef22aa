"""Access logging and HTTP metrics."""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.core.metrics import record_http_request

logger = structlog.get_logger(__name__)

UNMATCHED_ENDPOINT = "<unmatched>"


def _endpoint_label(request: Request) -> str:
    """
    Full route template such as /v1/gift-cards/{gift_card_id}.

    Path parameter values in the request path are replaced by their names,
    so the label set is bounded by the number of routes. Requests that
    matched no route share a single label.
    """
    if request.scope.get("route") is None:
        return UNMATCHED_ENDPOINT

    names = {str(value): name for name, value in request.path_params.items()}
    return "/".join(
        f"{{{names[segment]}}}" if segment in names else segment
        for segment in request.scope["path"].split("/")
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """Emits request_started / request_completed events and records request metrics."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        log = logger.bind(method=request.method, path=request.url.path)
        log.info("request_started", query=str(request.query_params) or None)

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as exc:
            log.error("request_failed", error=str(exc), error_type=type(exc).__name__)
            raise
        finally:
            elapsed = time.perf_counter() - started
            record_http_request(request.method, _endpoint_label(request), status_code, elapsed)
            log.info(
                "request_completed",
                status_code=status_code,
                duration_ms=round(elapsed * 1000, 2),
            )
