import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from .config import Settings

logger = logging.getLogger(__name__)


def build_limiter(settings: Settings) -> Limiter:
    # One budget per client across all routes, keyed on the socket peer.
    # X-Forwarded-For only counts once a trusted proxy layer
    # (uvicorn --forwarded-allow-ips) has rewritten the client.
    return Limiter(
        key_func=get_remote_address,
        application_limits=[settings.rate_limit],
        strategy="fixed-window",
        headers_enabled=True,
    )


# sync on purpose: SlowAPIMiddleware calls it without awaiting for sync routes
def handle_rate_limit_exceeded(request: Request, exc: RateLimitExceeded):
    logger.warning("Rate limit exceeded for %s on %s", get_remote_address(request), request.url.path)
    response = JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"message": "Too many requests, please try again later."},
    )
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)
