"""
Secure HTTP headers middleware.

Binding responses carry credentials, so every response is marked
non-cacheable in addition to the usual hardening headers.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def apply_secure_headers(response: Response) -> Response:
    """Set SECURE_HEADERS on ``response`` unless already present."""
    for header_name, header_value in SECURE_HEADERS.items():
        response.headers.setdefault(header_name, header_value)
    return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds SECURE_HEADERS to every outgoing response.

    Responses built by the catch-all 500 handler never pass through
    here and call ``apply_secure_headers`` themselves.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        return apply_secure_headers(await call_next(request))
