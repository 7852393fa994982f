"""Chat command handling for the password bot.

Turns chat-style commands (``/start``, ``/help``, ``/pass 20 --no-symbols``)
and inline button callbacks into structured replies. The messaging
transport itself is out of scope: it delivers ``(chat_id, text)`` or
``(user_id, callback_data)`` and renders the returned BotReply.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from securepass.app.core.config import Settings
from securepass.app.core.logging import get_logger
from securepass.app.exceptions import (
    CommandParseError,
    InvalidLengthArgumentError,
    InvalidLengthError,
    LengthOutOfRangeError,
    NoCharacterClassError,
    PasswordGenerationError,
    RateLimitExceededError,
    UnrecognizedOptionError,
    describe_window,
)
from securepass.app.services.issuer import PasswordIssuer
from securepass.app.services.password import GeneratedSecret, GenerationConfig, Strength

logger = get_logger(__name__)

# Flag -> (GenerationConfig field, value)
OPTION_FLAGS: Dict[str, Tuple[str, bool]] = {
    "--symbols": ("symbols", True),
    "--no-symbols": ("symbols", False),
    "--digits": ("digits", True),
    "--no-digits": ("digits", False),
    "--uppercase": ("uppercase", True),
    "--no-uppercase": ("uppercase", False),
    "--lowercase": ("lowercase", True),
    "--no-lowercase": ("lowercase", False),
    "--no-ambiguous": ("exclude_ambiguous", True),
}

STRENGTH_EMOJI = {
    Strength.STRONG: "💪",
    Strength.MEDIUM: "👍",
    Strength.WEAK: "⚠️",
}

# Callback data -> arguments of the equivalent /pass command
PRESET_ARGS: Dict[str, str] = {
    "pass_default": "",
    "pass_24": "24",
    "pass_32": "32",
    "pass_no_symbols": "16 --no-symbols",
    "pass_no_ambiguous": "18 --no-ambiguous",
}

BOT_COMMANDS: List[Tuple[str, str]] = [
    ("start", "Start the bot and see welcome message"),
    ("help", "Show help and usage information"),
    ("pass", "Generate a secure password"),
]

USAGE_HINT = (
    "Usage: `/pass [length] [options]`\n"
    "Example: `/pass 20 --symbols --no-ambiguous`\n\n"
    "Type `/help` for detailed usage."
)


def parse_password_args(args: str, default_length: int) -> GenerationConfig:
    """Parse password generation command arguments.

    Expected format: ``[length] [--option1] [--option2] ...``. Tokens are
    applied left to right, so a later length or flag wins.

    Args:
        args: Argument text following the command
        default_length: Length used when no length token is present

    Returns:
        GenerationConfig with defaults overridden by the arguments

    Raises:
        UnrecognizedOptionError: For an unknown ``--`` option
        InvalidLengthArgumentError: For a token that is not a number
    """
    values = {"length": default_length}
    for part in args.split():
        if part.startswith("--"):
            if part not in OPTION_FLAGS:
                raise UnrecognizedOptionError(part)
            name, value = OPTION_FLAGS[part]
            values[name] = value
        elif part.isascii() and part.isdigit():
            values["length"] = int(part)
        else:
            raise InvalidLengthArgumentError(part)
    return GenerationConfig(**values)


@dataclass
class InlineButton:
    """Inline keyboard button attached to a reply."""
    label: str
    callback_data: str


@dataclass
class BotReply:
    """Structured reply handed back to the messaging transport.

    Attributes:
        text: Message to send to the chat, if any
        keyboard: Rows of inline buttons shown under the message
        notice: Short popup text acknowledging a button press
    """
    text: Optional[str] = None
    keyboard: List[List[InlineButton]] = field(default_factory=list)
    notice: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "keyboard": [
                [{"label": b.label, "callback_data": b.callback_data} for b in row]
                for row in self.keyboard
            ],
            "notice": self.notice,
        }


START_KEYBOARD = [
    [InlineButton("📋 Default (16)", "pass_default"), InlineButton("🔒 Strong (24)", "pass_24")],
    [InlineButton("📖 Help", "show_help")],
]

HELP_KEYBOARD = [
    [InlineButton("📋 Default", "pass_default"), InlineButton("🔒 Strong (24)", "pass_24")],
    [InlineButton("🔤 No Symbols", "pass_no_symbols"), InlineButton("🚫 Ambiguous", "pass_no_ambiguous")],
    [InlineButton("🔐 Very Strong (32)", "pass_32"), InlineButton("📏 Custom Length", "pass_custom")],
]


def format_password_reply(secret: GeneratedSecret) -> str:
    """Render a generated password with its strength and metadata."""
    emoji = STRENGTH_EMOJI[secret.metadata.strength]
    return (
        f"🔐 Your Secure Password:\n\n`{secret.value}`\n\n"
        f"{emoji} {secret.metadata.summary()}\n\n"
        "⚠️ Security reminder: Copy this password immediately and store it "
        "securely. This message will remain in your chat history."
    )


class PasswordBot:
    """Command handlers for the password bot.

    Args:
        issuer: Service issuing rate limited passwords
        settings: Application settings (length bounds, limits, bot name)
    """

    def __init__(self, issuer: PasswordIssuer, settings: Settings):
        self.issuer = issuer
        self.settings = settings

    def start_text(self) -> str:
        return (
            f"🔐 {self.settings.bot_name} Password Generator\n\n"
            "Welcome! I generate strong, random passwords using cryptographically "
            "secure randomness.\n\n"
            "🔒 Privacy Notice:\n"
            "• Passwords are generated using OS-level secure randomness\n"
            "• Passwords are NOT logged or stored on the server\n"
            "• However, chat messages are not end-to-end encrypted\n"
            "• Use this bot as a convenience tool, but be aware of inherent risks\n\n"
            "📝 Quick Start:\n"
            "Use /pass to generate a password with default settings, or customize it:\n"
            f"• /pass - Default {self.settings.default_password_length}-character password\n"
            "• /pass 24 - 24-character password\n"
            "• /pass 20 --symbols - Include symbols\n"
            "• /pass 16 --no-ambiguous - Exclude ambiguous characters\n\n"
            "Type /help for detailed usage information."
        )

    def help_text(self) -> str:
        s = self.settings
        return (
            "🔐 Password Generator - Help\n\n"
            "Available Commands:\n"
            "• /start - Welcome message\n"
            "• /help - Show this help message\n"
            "• /pass or /password - Generate a secure password\n\n"
            "Password Generation Syntax:\n"
            "/pass [length] [options]\n\n"
            "Examples:\n"
            f"• /pass - Default password (length: {s.default_password_length})\n"
            "• /pass 24 - 24-character password\n"
            "• /pass 20 --symbols - Include symbols\n"
            "• /pass 16 --no-symbols - No symbols\n"
            "• /pass 18 --no-ambiguous - Exclude ambiguous chars (0,O,o,1,l,I)\n"
            "• /pass 20 --no-digits --symbols - No digits, with symbols\n\n"
            "Available Options:\n"
            "• --symbols / --no-symbols\n"
            "• --digits / --no-digits\n"
            "• --uppercase / --no-uppercase\n"
            "• --lowercase / --no-lowercase\n"
            "• --no-ambiguous - Exclude confusing characters\n\n"
            "Constraints:\n"
            f"• Min length: {s.min_password_length} characters\n"
            f"• Max length: {s.max_password_length} characters\n"
            "• At least one character type must be enabled\n"
            f"• Rate limit: {s.rate_limit_per_minute} passwords per "
            f"{describe_window(s.rate_limit_window_seconds)} per chat\n\n"
            "Security Recommendations:\n"
            "✅ Use long passwords (16+ characters)\n"
            "✅ Use unique passwords for each account\n"
            "✅ Store passwords in a secure password manager\n"
            "⚠️ Remember: chat messages are not end-to-end encrypted\n"
            "⚠️ This bot doesn't log passwords, but they travel through the chat provider's servers"
        )

    def handle_message(self, chat_id: int, text: str) -> BotReply:
        """Route an incoming chat message to its command handler."""
        parts = text.strip().split(maxsplit=1)
        if not parts or not parts[0].startswith("/"):
            return self.handle_unknown()
        command = parts[0]
        args = parts[1] if len(parts) > 1 else ""

        name = command[1:].split("@", 1)[0].lower()
        if name == "start":
            logger.info(f"User {chat_id} started the bot", extra={"chat_id": chat_id})
            return BotReply(text=self.start_text(), keyboard=START_KEYBOARD)
        if name == "help":
            return BotReply(text=self.help_text(), keyboard=HELP_KEYBOARD)
        if name in ("pass", "password"):
            return self.handle_password(chat_id, args)
        return self.handle_unknown()

    def handle_unknown(self) -> BotReply:
        return BotReply(
            text="❓ Unknown command. Type /help to see available commands."
        )

    def handle_password(self, chat_id: int, args: str) -> BotReply:
        """Handle ``/pass`` and ``/password``.

        The rate limit is checked before the arguments are parsed, so
        malformed commands still count against the chat's window.
        """
        try:
            self.issuer.admit(chat_id)
        except RateLimitExceededError as exc:
            return BotReply(text=f"⏳ {exc.message}")

        try:
            config = parse_password_args(args, self.settings.default_password_length)
        except CommandParseError as exc:
            return BotReply(text=f"❌ Error: {exc.message}\n\n{USAGE_HINT}")

        try:
            secret = self.issuer.generate(config, key=chat_id)
        except LengthOutOfRangeError as exc:
            return BotReply(text=f"❌ {exc.message}")
        except (InvalidLengthError, NoCharacterClassError) as exc:
            return BotReply(
                text=(
                    f"❌ Configuration error: {exc.message}\n\n"
                    "Make sure at least one character type is enabled."
                )
            )
        except PasswordGenerationError as exc:
            return BotReply(text=f"❌ Failed to generate password: {exc.message}")

        return BotReply(text=format_password_reply(secret))

    def handle_callback(self, user_id: int, data: str) -> BotReply:
        """Handle an inline button press."""
        if data == "show_help":
            return BotReply(text=self.help_text(), keyboard=HELP_KEYBOARD)
        if data == "pass_custom":
            return BotReply(
                text=(
                    "📝 Please type your custom password command:\n"
                    "Example: /pass 20 --symbols --no-digits"
                )
            )
        if data not in PRESET_ARGS:
            return BotReply()

        try:
            self.issuer.admit(user_id)
            config = parse_password_args(
                PRESET_ARGS[data], self.settings.default_password_length
            )
            secret = self.issuer.generate(config, key=user_id)
        except RateLimitExceededError as exc:
            return BotReply(notice=exc.message)
        except LengthOutOfRangeError:
            return BotReply(notice="Invalid password length")
        except (CommandParseError, PasswordGenerationError) as exc:
            return BotReply(notice=f"Failed to generate: {exc.message}")

        return BotReply(text=format_password_reply(secret))
