"""Rate limiting for password generation.

A single in-process sliding window limiter is created in the application
lifespan and stored on ``app.state``; routes reach it through the
dependencies below. There is no cross-process backend.
"""

import hmac
from typing import List

from fastapi import HTTPException, Request

from securepass.app.core.security import derive_rate_limit_key
from securepass.app.middleware.rate_limit.models import RateLimitResult
from securepass.app.middleware.rate_limit.sliding_window import SlidingWindowRateLimiter

__all__ = [
    "RateLimitResult",
    "SlidingWindowRateLimiter",
    "get_client_key",
    "get_rate_limiter",
]

MAX_API_KEY_LENGTH = 512


def get_rate_limiter(request: Request) -> SlidingWindowRateLimiter:
    """FastAPI dependency returning the application's rate limiter."""
    return request.app.state.rate_limiter


def get_client_key(request: Request) -> int:
    """Get rate limit key for an HTTP request.

    A bearer token is used only when it is one of the configured
    ``api_keys``; any other token is ignored. ``X-Forwarded-For`` is read
    only when the direct peer is listed in ``trusted_proxies``. Everything
    else is keyed on the peer address, so clients cannot mint new keys by
    rotating headers. Identities are hashed into an opaque 64-bit key so no
    raw token or address is kept in memory.

    Args:
        request: FastAPI request object

    Returns:
        Signed 64-bit rate limit key
    """
    app_settings = request.app.state.settings
    peer = request.client.host if request.client else "unknown"

    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        api_key = auth[7:].strip()
        # Reject extremely long keys before comparing
        if len(api_key) > MAX_API_KEY_LENGTH:
            raise HTTPException(
                status_code=400,
                detail=f"API key too long (max {MAX_API_KEY_LENGTH} characters)",
            )
        if _is_known_api_key(api_key, app_settings.api_keys):
            return derive_rate_limit_key(f"apikey:{api_key}")

    client_ip = peer
    if peer in app_settings.trusted_proxies:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            client_ip = forwarded.split(",")[0].strip() or peer
    return derive_rate_limit_key(f"ip:{client_ip}")


def _is_known_api_key(api_key: str, api_keys: List[str]) -> bool:
    candidate = api_key.encode("utf-8")
    return any(hmac.compare_digest(candidate, known.encode("utf-8")) for known in api_keys)
