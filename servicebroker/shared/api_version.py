"""
Broker API version negotiation.

Platforms send X-Broker-API-Version on every OSB request. When a version
is configured, requests to /v2/ with a missing or different version are
rejected with 412 before reaching any route.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from servicebroker.domain.broker.errors import ApiVersionMismatchError
from servicebroker.interfaces.broker.outcomes import map_error, render

logger = logging.getLogger(__name__)

API_VERSION_HEADER = "X-Broker-API-Version"
BROKER_PATH_MARKER = "/v2/"


class ApiVersionMiddleware(BaseHTTPMiddleware):
    """Rejects OSB requests whose API version header does not match."""

    def __init__(self, app: ASGIApp, expected_version: str) -> None:
        super().__init__(app)
        self.expected_version = expected_version

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if BROKER_PATH_MARKER in request.url.path:
            provided = request.headers.get(API_VERSION_HEADER)
            if provided != self.expected_version:
                logger.warning(
                    "Rejected broker API version %s (expected %s)",
                    provided,
                    self.expected_version,
                )
                return render(map_error(ApiVersionMismatchError(self.expected_version, provided)))
        return await call_next(request)
