"""API endpoints package for SecurePass."""

from securepass.app.api.bot import router as bot_router
from securepass.app.api.passwords import router as passwords_router

__all__ = [
    "bot_router",
    "passwords_router",
]
