"""Services package for SecurePass."""

from securepass.app.services.bot import BotReply, InlineButton, PasswordBot, parse_password_args
from securepass.app.services.issuer import PasswordIssuer

__all__ = [
    "BotReply",
    "InlineButton",
    "PasswordBot",
    "PasswordIssuer",
    "parse_password_args",
]
