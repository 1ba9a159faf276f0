"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (health and the OSB /v2 API, plain and platform-prefixed)
- Error handlers (centralized domain-to-HTTP mapping)
- Broker API version check
- Security middleware (headers, rate limiting)
- Logging configuration

No business logic belongs here.
"""

from typing import Optional

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from servicebroker.core.config import Settings, settings
from servicebroker.infrastructure.broker.catalog_adapter import ConfiguredCatalogService
from servicebroker.infrastructure.broker.in_memory_state import InMemoryBrokerState
from servicebroker.interfaces.broker.router import router as broker_router
from servicebroker.interfaces.health import router as health_router
from servicebroker.shared.api_version import ApiVersionMiddleware
from servicebroker.shared.errors.handlers import register_error_handlers
from servicebroker.shared.logging import configure_logging
from servicebroker.shared.security.headers import SecurityHeadersMiddleware
from servicebroker.shared.security.rate_limiting import (
    build_limiter,
    rate_limit_exceeded_handler,
)

PLATFORM_INSTANCE_PREFIX = "/{platform_instance_id}"


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        config: Settings to build the app with. Defaults to the
            environment-loaded ``settings``. The catalog, rate limit,
            API version and health version all come from it.

    Returns:
        A fully configured FastAPI application instance.
    """
    config = config or settings
    configure_logging(level=config.log_level)

    app = FastAPI(
        title=config.project_name,
        version=config.version,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    # --- Application state ---
    app.state.settings = config
    app.state.catalog_service = ConfiguredCatalogService.from_file(config.catalog_path)
    app.state.broker_state = InMemoryBrokerState()

    # --- Rate Limiting ---
    app.state.limiter = build_limiter(config)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Broker API version ---
    if not config.accepts_any_api_version:
        app.add_middleware(ApiVersionMiddleware, expected_version=config.broker_api_version)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(broker_router)
    app.include_router(
        broker_router, prefix=PLATFORM_INSTANCE_PREFIX, include_in_schema=False
    )

    return app


app = create_app()
