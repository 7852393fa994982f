import json
import re
from typing import Annotated, Any

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _parse_list(raw: Any) -> list[str]:
    """Parse a list setting given as JSON or as comma/whitespace separated text."""
    if raw is None:
        return []
    if isinstance(raw, (list, tuple, set, frozenset)):
        items = [str(v).strip() for v in raw]
        return [v for v in items if v]

    raw = str(raw).strip()
    if not raw or raw == "[]":
        return []
    if raw.startswith("["):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            items = [str(v).strip() for v in parsed]
            return [v for v in items if v]

    return [p for p in re.split(r"[,\s]+", raw) if p]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be configured via environment variables or .env file.
    """

    # Debug mode - enables detailed error responses
    debug: bool = False

    # Display name used in bot replies
    bot_name: str = "SecurePass"

    # Password length settings
    default_password_length: int = 16  # Used when a request omits the length
    min_password_length: int = 8
    max_password_length: int = 64

    # Rate limiting settings (per chat / client key)
    rate_limit_per_minute: int = 10
    rate_limit_window_seconds: int = 60

    # Bearer tokens accepted as rate limit identities; any other token is ignored
    api_keys: Annotated[list[str], NoDecode] = []
    # Peers whose X-Forwarded-For header is trusted
    trusted_proxies: Annotated[list[str], NoDecode] = []

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "text"  # text | structured | json

    @field_validator("min_password_length")
    @classmethod
    def validate_min_length_positive(cls, v: int) -> int:
        """Validate the minimum length is positive."""
        if v < 1:
            raise ValueError("MIN_PASSWORD_LENGTH must be greater than 0")
        return v

    @field_validator("rate_limit_per_minute", "rate_limit_window_seconds")
    @classmethod
    def validate_rate_limit_positive(cls, v: int) -> int:
        """Validate rate limit values are positive."""
        if v < 1:
            raise ValueError("Rate limit values must be at least 1")
        return v

    @field_validator("api_keys", "trusted_proxies", mode="before")
    @classmethod
    def decode_list(cls, v: Any) -> list[str]:
        return _parse_list(v)

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("text", "structured", "json"):
            raise ValueError("log_format must be one of: text, structured, json")
        return v

    @model_validator(mode="after")
    def validate_length_bounds(self) -> "Settings":
        """Validate the default length sits inside the min/max bounds."""
        if self.max_password_length < self.min_password_length:
            raise ValueError(
                f"MAX_PASSWORD_LENGTH ({self.max_password_length}) must be >= "
                f"MIN_PASSWORD_LENGTH ({self.min_password_length})"
            )
        if not (
            self.min_password_length
            <= self.default_password_length
            <= self.max_password_length
        ):
            raise ValueError(
                f"DEFAULT_PASSWORD_LENGTH ({self.default_password_length}) must be "
                f"between {self.min_password_length} and {self.max_password_length}"
            )
        return self

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Global settings instance
settings = Settings()
