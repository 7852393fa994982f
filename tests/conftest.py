"""Shared fixtures for SecurePass tests."""

import pytest

from securepass.app.core.config import Settings
from securepass.app.core.security import SeededSecureRandom
from securepass.app.middleware.rate_limit import SlidingWindowRateLimiter
from securepass.app.services.issuer import PasswordIssuer


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def rng():
    """Seeded secure source; only used for structural assertions."""
    return SeededSecureRandom(b"securepass-tests")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return SlidingWindowRateLimiter(window_seconds=60, clock=clock)


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        default_password_length=16,
        min_password_length=8,
        max_password_length=64,
        rate_limit_per_minute=5,
    )


@pytest.fixture
def issuer(test_settings, limiter, rng):
    return PasswordIssuer.from_settings(test_settings, limiter, rng)
