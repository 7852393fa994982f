"""Tests for chat command parsing and bot handlers."""

import re

import pytest

from securepass.app.core.config import Settings
from securepass.app.exceptions import (
    InvalidLengthArgumentError,
    UnrecognizedOptionError,
)
from securepass.app.middleware.rate_limit import SlidingWindowRateLimiter
from securepass.app.services.bot import (
    BOT_COMMANDS,
    HELP_KEYBOARD,
    START_KEYBOARD,
    USAGE_HINT,
    BotReply,
    PasswordBot,
    parse_password_args,
)
from securepass.app.services.issuer import PasswordIssuer
from securepass.app.services.password import AMBIGUOUS_CHARACTERS, SYMBOLS, GenerationConfig

PASSWORD_RE = re.compile(r"`([^`]+)`")


def extract_password(text: str) -> str:
    return PASSWORD_RE.search(text).group(1)


@pytest.fixture
def bot(issuer, test_settings):
    return PasswordBot(issuer, test_settings)


class TestParsePasswordArgs:
    """Tests for parse_password_args."""

    def test_empty_uses_defaults(self):
        assert parse_password_args("", 16) == GenerationConfig(length=16)

    def test_length_only(self):
        config = parse_password_args("24", 16)
        assert config.length == 24
        assert config.symbols is True

    def test_length_and_options(self):
        config = parse_password_args("20 --symbols --no-ambiguous", 16)
        assert config == GenerationConfig(length=20, symbols=True, exclude_ambiguous=True)

    def test_all_negative_flags(self):
        config = parse_password_args(
            "--no-symbols --no-digits --no-uppercase --no-lowercase", 12
        )
        assert config.length == 12
        assert config.enabled_classes() == []

    def test_later_tokens_win(self):
        config = parse_password_args("12 --no-symbols 20 --symbols", 16)
        assert config.length == 20
        assert config.symbols is True

    def test_extra_whitespace(self):
        assert parse_password_args("   18    --no-digits  ", 16).length == 18

    @pytest.mark.parametrize("token", ["abc", "-5", "12.5", "1e3", "２０"])
    def test_invalid_length(self, token):
        with pytest.raises(InvalidLengthArgumentError) as exc_info:
            parse_password_args(token, 16)
        assert exc_info.value.message == f"Invalid length: '{token}'. Expected a number."

    @pytest.mark.parametrize("token", ["--foo", "--no-ambiguous=1", "--"])
    def test_unknown_option(self, token):
        with pytest.raises(UnrecognizedOptionError) as exc_info:
            parse_password_args(f"16 {token}", 16)
        assert exc_info.value.message == f"Unknown option: {token}"


class TestMessages:
    """Tests for PasswordBot.handle_message."""

    def test_start(self, bot):
        reply = bot.handle_message(1, "/start")
        assert "SecurePass Password Generator" in reply.text
        assert "/pass - Default 16-character password" in reply.text
        assert reply.keyboard == START_KEYBOARD

    def test_help(self, bot):
        reply = bot.handle_message(1, "/help")
        assert "Min length: 8 characters" in reply.text
        assert "Max length: 64 characters" in reply.text
        assert "Rate limit: 5 passwords per minute per chat" in reply.text
        assert reply.keyboard == HELP_KEYBOARD

    def test_pass_default(self, bot):
        reply = bot.handle_message(1, "/pass")
        password = extract_password(reply.text)
        assert len(password) == 16
        assert "Length: 16 | Types: lowercase, uppercase, digits, symbols" in reply.text
        assert "Strength: Strong" in reply.text

    def test_pass_with_options(self, bot):
        reply = bot.handle_message(1, "/pass 20 --no-symbols --no-ambiguous")
        password = extract_password(reply.text)
        assert len(password) == 20
        assert not set(password) & set(SYMBOLS)
        assert not set(password) & AMBIGUOUS_CHARACTERS
        assert "Pool size: 56" in reply.text

    def test_password_alias(self, bot):
        reply = bot.handle_message(1, "/password 12")
        assert len(extract_password(reply.text)) == 12

    def test_bot_username_suffix(self, bot):
        reply = bot.handle_message(1, "/pass@SecurePassBot 24")
        assert len(extract_password(reply.text)) == 24

    @pytest.mark.parametrize("text", ["/pass\n20", "/pass\t20", "  /pass \t 20  --no-symbols"])
    def test_command_split_on_any_whitespace(self, bot, text):
        reply = bot.handle_message(1, text)
        assert len(extract_password(reply.text)) == 20

    def test_length_too_short(self, bot):
        reply = bot.handle_message(1, "/pass 4")
        assert reply.text == "❌ Password length too short. Minimum: 8 characters."

    def test_length_zero_is_out_of_range(self, bot):
        reply = bot.handle_message(1, "/pass 0")
        assert reply.text == "❌ Password length too short. Minimum: 8 characters."

    def test_length_too_long(self, bot):
        reply = bot.handle_message(1, "/pass 100")
        assert reply.text == "❌ Password length too long. Maximum: 64 characters."

    def test_invalid_length_argument(self, bot):
        reply = bot.handle_message(1, "/pass abc")
        assert reply.text == (
            f"❌ Error: Invalid length: 'abc'. Expected a number.\n\n{USAGE_HINT}"
        )

    def test_unknown_option(self, bot):
        reply = bot.handle_message(1, "/pass 16 --bogus")
        assert reply.text.startswith("❌ Error: Unknown option: --bogus")

    def test_no_character_class(self, bot):
        reply = bot.handle_message(
            1, "/pass 16 --no-lowercase --no-uppercase --no-digits --no-symbols"
        )
        assert reply.text == (
            "❌ Configuration error: At least one character type must be enabled\n\n"
            "Make sure at least one character type is enabled."
        )

    @pytest.mark.parametrize("text", ["/foo", "hello", "/", "   "])
    def test_unknown_command(self, bot, text):
        reply = bot.handle_message(1, text)
        assert reply.text == "❓ Unknown command. Type /help to see available commands."
        assert reply.keyboard == []

    def test_start_and_help_are_not_rate_limited(self, bot):
        for _ in range(10):
            bot.handle_message(1, "/help")
            bot.handle_message(1, "/start")
        assert "Your Secure Password" in bot.handle_message(1, "/pass").text


class TestRateLimiting:
    """Tests for per-chat rate limiting in the bot."""

    def test_sixth_request_is_rejected(self, bot):
        for _ in range(5):
            assert "Your Secure Password" in bot.handle_message(1, "/pass").text

        reply = bot.handle_message(1, "/pass")
        assert reply.text == (
            "⏳ Too many requests. Maximum 5 password generations per minute. Please wait."
        )

    def test_window_slides(self, bot, clock):
        for _ in range(5):
            bot.handle_message(1, "/pass")
        assert reply_is_rate_limited(bot.handle_message(1, "/pass"))

        clock.advance(61)
        assert "Your Secure Password" in bot.handle_message(1, "/pass").text

    def test_malformed_commands_count(self, bot):
        for _ in range(5):
            bot.handle_message(1, "/pass abc")
        assert reply_is_rate_limited(bot.handle_message(1, "/pass"))

    def test_rate_limit_checked_before_parsing(self, bot):
        for _ in range(5):
            bot.handle_message(1, "/pass")
        assert reply_is_rate_limited(bot.handle_message(1, "/pass abc"))

    def test_chats_are_independent(self, bot):
        for _ in range(5):
            bot.handle_message(1, "/pass")
        assert "Your Secure Password" in bot.handle_message(2, "/pass").text


def reply_is_rate_limited(reply: BotReply) -> bool:
    return reply.text is not None and reply.text.startswith("⏳")


class TestWindowWording:
    """Replies describe the configured rate limit window."""

    def test_help_and_rate_limit_reply_use_window(self, clock, rng):
        window_settings = Settings(
            _env_file=None, rate_limit_per_minute=1, rate_limit_window_seconds=90
        )
        limiter = SlidingWindowRateLimiter(window_seconds=90, clock=clock)
        bot = PasswordBot(
            PasswordIssuer.from_settings(window_settings, limiter, rng), window_settings
        )

        assert "Rate limit: 1 passwords per 90 seconds per chat" in bot.help_text()
        bot.handle_message(1, "/pass")
        assert bot.handle_message(1, "/pass").text == (
            "⏳ Too many requests. Maximum 1 password generations per 90 seconds. Please wait."
        )


class TestCallbacks:
    """Tests for inline button callbacks."""

    @pytest.mark.parametrize(
        ("data", "length"),
        [("pass_default", 16), ("pass_24", 24), ("pass_32", 32)],
    )
    def test_length_presets(self, bot, data, length):
        reply = bot.handle_callback(7, data)
        assert len(extract_password(reply.text)) == length
        assert reply.notice is None

    def test_no_symbols_preset(self, bot):
        reply = bot.handle_callback(7, "pass_no_symbols")
        password = extract_password(reply.text)
        assert len(password) == 16
        assert not set(password) & set(SYMBOLS)

    def test_no_ambiguous_preset(self, bot):
        reply = bot.handle_callback(7, "pass_no_ambiguous")
        password = extract_password(reply.text)
        assert len(password) == 18
        assert not set(password) & AMBIGUOUS_CHARACTERS

    def test_show_help(self, bot):
        reply = bot.handle_callback(7, "show_help")
        assert reply.text == bot.help_text()
        assert reply.keyboard == HELP_KEYBOARD

    def test_custom_length_prompt(self, bot):
        reply = bot.handle_callback(7, "pass_custom")
        assert "/pass 20 --symbols --no-digits" in reply.text

    def test_unknown_callback_is_ignored(self, bot):
        assert bot.handle_callback(7, "nonsense") == BotReply()

    def test_rate_limited_callback_sets_notice(self, bot):
        for _ in range(5):
            bot.handle_callback(7, "pass_default")

        reply = bot.handle_callback(7, "pass_default")
        assert reply.text is None
        assert reply.notice == (
            "Too many requests. Maximum 5 password generations per minute. Please wait."
        )

    def test_callbacks_share_window_with_commands(self, bot):
        for _ in range(5):
            bot.handle_message(7, "/pass")
        assert bot.handle_callback(7, "pass_24").notice is not None

    def test_preset_outside_bounds(self, limiter, rng):
        narrow = Settings(
            _env_file=None,
            default_password_length=16,
            min_password_length=8,
            max_password_length=20,
        )
        bot = PasswordBot(PasswordIssuer.from_settings(narrow, limiter, rng), narrow)

        reply = bot.handle_callback(7, "pass_32")
        assert reply.text is None
        assert reply.notice == "Invalid password length"


class TestBotReply:
    """Tests for BotReply serialization."""

    def test_to_dict(self):
        reply = BotReply(text="hi", keyboard=START_KEYBOARD)
        data = reply.to_dict()
        assert data["text"] == "hi"
        assert data["notice"] is None
        assert data["keyboard"][0][1] == {"label": "🔒 Strong (24)", "callback_data": "pass_24"}

    def test_every_preset_button_is_handled(self, bot):
        for row in HELP_KEYBOARD + START_KEYBOARD:
            for button in row:
                assert bot.handle_callback(99, button.callback_data) != BotReply()

    def test_command_menu(self):
        assert [name for name, _ in BOT_COMMANDS] == ["start", "help", "pass"]
