"""Password issuing service.

Gates each request through the rate limiter, enforces the configured
length bounds, generates the password and logs its metadata. The password
itself is returned to the caller and never logged.
"""

from typing import Optional

from securepass.app.core.config import Settings
from securepass.app.core.logging import get_log_context, get_logger
from securepass.app.core.security import SecureRandom
from securepass.app.exceptions import LengthOutOfRangeError
from securepass.app.middleware.rate_limit import SlidingWindowRateLimiter
from securepass.app.services.password import GeneratedSecret, GenerationConfig, generate

logger = get_logger(__name__)


class PasswordIssuer:
    """Issues passwords to rate limited callers.

    Args:
        rate_limiter: Shared limiter owning the per-key windows
        rng: Cryptographically secure random source
        rate_limit: Admissions per key per window
        min_length: Minimum accepted password length
        max_length: Maximum accepted password length
        default_length: Length used when a request omits one
    """

    def __init__(
        self,
        rate_limiter: SlidingWindowRateLimiter,
        rng: SecureRandom,
        *,
        rate_limit: int,
        min_length: int,
        max_length: int,
        default_length: int = 16,
    ):
        self.rate_limiter = rate_limiter
        self.rng = rng
        self.rate_limit = rate_limit
        self.min_length = min_length
        self.max_length = max_length
        self.default_length = default_length

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        rate_limiter: SlidingWindowRateLimiter,
        rng: SecureRandom,
    ) -> "PasswordIssuer":
        return cls(
            rate_limiter,
            rng,
            rate_limit=settings.rate_limit_per_minute,
            min_length=settings.min_password_length,
            max_length=settings.max_password_length,
            default_length=settings.default_password_length,
        )

    def admit(self, key: int) -> None:
        """Record an admission for ``key`` or raise RateLimitExceededError."""
        self.rate_limiter.admit(key, self.rate_limit)

    def generate(
        self,
        config: GenerationConfig,
        *,
        key: Optional[int] = None,
        request_id: Optional[str] = None,
    ) -> GeneratedSecret:
        """Generate a password for an already admitted request.

        Raises:
            LengthOutOfRangeError: If the length is outside the configured bounds
            PasswordGenerationError: If the configuration cannot produce a password
        """
        if not self.min_length <= config.length <= self.max_length:
            raise LengthOutOfRangeError(config.length, self.min_length, self.max_length)

        secret = generate(config, self.rng)

        logger.info(
            f"Generated password for key {key}: {secret.metadata.summary()}",
            extra=get_log_context(request_id=request_id, chat_id=key),
        )
        return secret

    def issue(
        self,
        key: int,
        config: GenerationConfig,
        *,
        request_id: Optional[str] = None,
    ) -> GeneratedSecret:
        """Admit ``key`` and generate a password for ``config``.

        Raises:
            RateLimitExceededError: If the key has no admissions left
            LengthOutOfRangeError: If the length is outside the configured bounds
            PasswordGenerationError: If the configuration cannot produce a password
        """
        self.admit(key)
        return self.generate(config, key=key, request_id=request_id)
