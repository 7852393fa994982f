"""In-process sliding window rate limiter."""

import math
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict

from securepass.app.core.logging import get_logger
from securepass.app.exceptions import RateLimitExceededError
from securepass.app.middleware.rate_limit.models import RateLimitResult

logger = get_logger(__name__)


class SlidingWindowRateLimiter:
    """Exact sliding window rate limiter keyed by an opaque integer.

    Every check re-evaluates the trailing ``window_seconds`` as of now:
    timestamps strictly older than the cutoff are pruned, and a request is
    admitted (and recorded) only while fewer than ``limit`` admissions
    remain in the window. Rejected attempts are not recorded.

    State lives for the lifetime of the instance. Keys are never evicted,
    only their timestamps are pruned, so callers must keep the key space
    bounded (e.g. one key per chat).

    Prune, check and record run under a single lock. The check never
    suspends, so the limiter is safe from threadpool workers and the
    event loop alike.
    """

    def __init__(
        self,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize rate limiter.

        Args:
            window_seconds: Length of the trailing window in seconds
            clock: Monotonic clock returning seconds
        """
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: Dict[int, Deque[float]] = {}
        self._lock = threading.Lock()

    def check(self, key: int, limit: int) -> RateLimitResult:
        """Check and, if allowed, record an admission for ``key``.

        Args:
            key: Opaque rate limit key (chat id or derived client key)
            limit: Maximum admissions per window

        Returns:
            RateLimitResult with allowed status and metadata
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")

        with self._lock:
            now = self._clock()
            cutoff = now - self.window_seconds

            timestamps = self._requests.setdefault(key, deque())
            while timestamps and timestamps[0] < cutoff:
                timestamps.popleft()

            if len(timestamps) >= limit:
                retry_after = max(1, math.ceil(timestamps[0] + self.window_seconds - now))
                return RateLimitResult(
                    allowed=False,
                    limit=limit,
                    remaining=0,
                    retry_after=retry_after,
                )

            timestamps.append(now)
            return RateLimitResult(
                allowed=True,
                limit=limit,
                remaining=limit - len(timestamps),
            )

    def admit(self, key: int, limit: int) -> None:
        """Admit a request for ``key`` or raise.

        Raises:
            RateLimitExceededError: If the key has no admissions left
        """
        result = self.check(key, limit)
        if not result.allowed:
            logger.warning(
                f"Rate limit exceeded for key {key}",
                extra={"chat_id": key, "retry_after": result.retry_after},
            )
            raise RateLimitExceededError(
                limit=limit,
                retry_after=result.retry_after,
                window_seconds=self.window_seconds,
            )

    def tracked_keys(self) -> int:
        """Number of keys currently held in memory."""
        with self._lock:
            return len(self._requests)
