"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, dsa_assistant.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dsa_assistant.api.deps.dependencies import get_service_cache
from dsa_assistant.api.error_handlers import register_exception_handlers
from dsa_assistant.configs import get_settings
from dsa_assistant.observability.logger import configure_logging
from dsa_assistant.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)
from .routers import chat_router, chatbot_router, health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    cache = get_service_cache()
    settings = cache.settings
    logger.info(
        f"{__name__}:lifespan - Starting ({settings.environment}); "
        f"rate limiting {'enabled' if settings.rate_limit.enabled else 'disabled'} "
        f"at {settings.rate_limit.requests_per_minute}/{settings.rate_limit.window_size_seconds}s"
    )

    yield

    cache.clear()
    logger.info(f"{__name__}:lifespan - Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="DSA Learning Assistant API",
        description="Retrieval-augmented Q&A over DSA course materials",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "X-RateLimit-Limit",
            "X-RateLimit-Remaining",
            "X-RateLimit-Reset",
            "Retry-After",
            "X-Correlation-ID",
        ],
    )

    # Added last so it wraps request logging and every log line carries the id
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(chatbot_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "dsa_assistant.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )
