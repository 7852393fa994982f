"""Custom exceptions for the SecurePass application."""

from typing import Optional


def describe_window(window_seconds: float) -> str:
    """Render a rate limit window for messages, e.g. "minute" or "30 seconds"."""
    if window_seconds == 60:
        return "minute"
    return f"{window_seconds:g} seconds"


class SecurePassException(Exception):
    """Base class for SecurePass exceptions with HTTP status code.

    All custom exceptions should inherit from this class and define
    their specific status_code and error_code for consistent HTTP
    response handling. Messages must never contain secret material.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str = "SecurePass error"):
        self.message = message
        super().__init__(message)


class PasswordGenerationError(SecurePassException):
    """Raised when a password cannot be generated for a configuration.

    Terminal for the single request; never retried internally.
    Maps to HTTP 400 Bad Request.
    """
    status_code = 400
    error_code = "password_generation_failed"


class InvalidLengthError(PasswordGenerationError):
    """Raised when the requested length is zero."""
    error_code = "invalid_length"

    def __init__(self, length: int = 0):
        self.length = length
        super().__init__("Password length must be greater than 0")


class NoCharacterClassError(PasswordGenerationError):
    """Raised when every character class is disabled."""
    error_code = "no_character_class"

    def __init__(self):
        super().__init__("At least one character type must be enabled")


class EmptyPoolError(PasswordGenerationError):
    """Raised when the derived character pool has no characters."""
    error_code = "empty_pool"

    def __init__(self):
        super().__init__("Character pool is empty")


class LengthTooShortForClassesError(PasswordGenerationError):
    """Raised when the length cannot hold one character per required class."""
    error_code = "length_too_short_for_classes"

    def __init__(self, length: int, required: int):
        self.length = length
        self.required = required
        super().__init__(
            f"Password length ({length}) is too short for the required "
            f"character types ({required})"
        )


class LengthOutOfRangeError(PasswordGenerationError):
    """Raised when the length falls outside the configured bounds."""
    error_code = "length_out_of_range"

    def __init__(self, length: int, min_length: int, max_length: int):
        self.length = length
        self.min_length = min_length
        self.max_length = max_length
        if length < min_length:
            message = f"Password length too short. Minimum: {min_length} characters."
        else:
            message = f"Password length too long. Maximum: {max_length} characters."
        super().__init__(message)


class CommandParseError(SecurePassException):
    """Raised when password command arguments cannot be parsed.

    Maps to HTTP 400 Bad Request.
    """
    status_code = 400
    error_code = "invalid_arguments"


class UnrecognizedOptionError(CommandParseError):
    """Raised for an unknown ``--option`` token."""
    error_code = "unrecognized_option"

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"Unknown option: {option}")


class InvalidLengthArgumentError(CommandParseError):
    """Raised when a positional token is not a valid length."""
    error_code = "invalid_length_argument"

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid length: '{token}'. Expected a number.")


class RateLimitExceededError(SecurePassException):
    """Raised when a key has used up its admissions for the current window.

    This is an expected, recoverable condition: callers should try again
    later. Maps to HTTP 429 Too Many Requests.
    """
    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(
        self,
        limit: int,
        retry_after: Optional[int] = None,
        window_seconds: float = 60,
    ):
        self.limit = limit
        self.retry_after = retry_after
        self.window_seconds = window_seconds
        super().__init__(
            f"Too many requests. Maximum {limit} password generations "
            f"per {describe_window(window_seconds)}. Please wait."
        )
