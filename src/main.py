"""
Gift Card Service - ASGI application.

Run with ``python -m src.cli serve`` or any ASGI server pointed at
``src.main:app``.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from src import __version__
from src.core.config import Settings, settings
from src.core.logging import setup_logging
from src.core.metrics import get_metrics, get_metrics_content_type
from src.infrastructure.database import db_manager
from src.presentation.api import api_router
from src.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    db_manager.init()
    logger.info("application_started", app=settings.app_name, version=__version__)

    try:
        yield
    finally:
        await db_manager.close()
        logger.info("application_stopped")


async def metrics_endpoint() -> Response:
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


async def docs_redirect() -> RedirectResponse:
    return RedirectResponse(url="/docs")


def create_app(config: Settings = settings) -> FastAPI:
    """
    Build the FastAPI application.

    Middleware order matters: RequestContextMiddleware is added last so it
    wraps LoggingMiddleware and every log line carries the request id.
    """
    application = FastAPI(
        title="Gift Card Service",
        description="Send gift cards to other users and accept or reject the ones you receive.",
        version=__version__,
        debug=config.debug,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(LoggingMiddleware)
    application.add_middleware(RequestContextMiddleware)

    error_handler_middleware(application)

    application.include_router(api_router)

    if config.metrics_enabled:
        application.add_api_route("/metrics", metrics_endpoint, include_in_schema=False)
    application.add_api_route("/", docs_redirect, include_in_schema=False)

    return application


app = create_app()
