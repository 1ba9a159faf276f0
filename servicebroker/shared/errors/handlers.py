"""
Centralized error handlers for FastAPI.

Hands raised errors to the outcome mapper together with the broker
operation the request was tagged with. No stack traces or internal
details are exposed to clients. All error bodies are ErrorMessage.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response

from servicebroker.domain.broker.errors import ServiceBrokerError
from servicebroker.interfaces.broker.dependencies import OPERATION_STATE_KEY
from servicebroker.interfaces.broker.outcomes import (
    Operation,
    map_error,
    map_validation_error,
    render,
)
from servicebroker.shared.security.headers import apply_secure_headers

logger = logging.getLogger(__name__)


def _operation_of(request: Request) -> Optional[Operation]:
    return getattr(request.state, OPERATION_STATE_KEY, None)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(ServiceBrokerError)
    async def handle_service_broker_error(
        request: Request, exc: ServiceBrokerError
    ) -> Response:
        """Map a domain error raised by a collaborator or use case."""
        operation = _operation_of(request)
        outcome = map_error(exc, operation)
        logger.warning(
            "%s during %s -> %d: %s",
            type(exc).__name__,
            operation.value if operation else request.url.path,
            outcome.status_code,
            exc.message,
        )
        return render(outcome)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> Response:
        """Handle malformed request bodies, paths and query strings."""
        logger.warning("Request validation failed: %d errors", len(exc.errors()))
        return render(map_validation_error(list(exc.errors())))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> Response:
        """Catch-all for unexpected errors. Never exposes internals.

        Runs outside the middleware stack, so hardening headers are set here.
        """
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return apply_secure_headers(render(map_error(exc, _operation_of(request))))
