"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from src.api.middleware.error_handler import (
    APIError,
    api_error_handler,
    error_handler_middleware,
    validation_exception_handler,
)
from src.api.middleware.latency_logging import latency_logging_middleware
from src.api.routes import delivery, health, offers, orders, products, realtime, reviews
from src.core.config import get_settings
from src.core.realtime import RealtimeHub

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control back to the application.
    """
    settings = get_settings()
    logger.info("Starting %s in %s mode", settings.app_name, settings.app_env)
    logger.info(
        "Notifications: email=%s sms=%s, geocoding=%s",
        "on" if settings.enable_email_notifications else "off",
        "on" if settings.enable_sms_notifications else "off",
        settings.geocoding_provider,
    )

    yield

    logger.info(
        "Shutting down %s (%d realtime clients connected)",
        settings.app_name,
        app.state.hub.connection_count,
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.restaurant_name} API",
        description="Restaurant ordering backend with real-time order tracking",
        version="1.0.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # One publish/subscribe hub per application, injected into services
    app.state.hub = RealtimeHub()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Request-ID"],
    )

    # Error handler middleware (outermost - catches all errors)
    app.add_middleware(BaseHTTPMiddleware, dispatch=error_handler_middleware)
    app.add_middleware(BaseHTTPMiddleware, dispatch=latency_logging_middleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(APIError, api_error_handler)

    app.include_router(health.router)
    app.include_router(realtime.router)

    api_router = APIRouter(prefix="/api")
    api_router.include_router(orders.router)
    api_router.include_router(delivery.router)
    api_router.include_router(products.router)
    api_router.include_router(offers.router)
    api_router.include_router(reviews.router)
    app.include_router(api_router)

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
