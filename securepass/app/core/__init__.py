"""Core utilities for SecurePass."""

from securepass.app.core.config import Settings, settings
from securepass.app.core.logging import get_logger, setup_logging
from securepass.app.core.security import (
    SecureRandom,
    SeededSecureRandom,
    SystemSecureRandom,
    derive_rate_limit_key,
)

__all__ = [
    "Settings",
    "settings",
    "get_logger",
    "setup_logging",
    "SecureRandom",
    "SeededSecureRandom",
    "SystemSecureRandom",
    "derive_rate_limit_key",
]
