"""Middleware package for SecurePass."""

from securepass.app.middleware.rate_limit import (
    SlidingWindowRateLimiter,
    get_client_key,
    get_rate_limiter,
)
from securepass.app.middleware.request_id import RequestIdMiddleware, get_request_id

__all__ = [
    "SlidingWindowRateLimiter",
    "get_client_key",
    "get_rate_limiter",
    "RequestIdMiddleware",
    "get_request_id",
]
