"""
Rate limiting configuration and setup.

Uses slowapi to enforce a default per-client rate limit on every route.
Each application gets its own Limiter built from its Settings; it is
disabled entirely when ``rate_limit_enabled`` is False.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import Response

from servicebroker.core.config import Settings
from servicebroker.interfaces.broker.outcomes import map_rate_limited, render


def build_limiter(config: Settings) -> Limiter:
    """Create the Limiter for one application instance.

    Args:
        config: Settings providing ``rate_limit_enabled`` and
            ``rate_limit_default``.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[config.rate_limit_default],
        enabled=config.rate_limit_enabled,
    )


def rate_limit_exceeded_handler(_request: Request, exc: RateLimitExceeded) -> Response:
    """Answer a rate limit violation with a 429 ErrorMessage.

    Args:
        _request: The incoming HTTP request.
        exc: The rate limit exceeded exception.
    """
    return render(map_rate_limited(str(exc.detail)))
