"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


class ConfigError(Exception):
    """Raised when a required setting is missing or malformed."""


def require_env(key: str) -> str:
    """
    Read a required environment variable.

    Raises:
        ConfigError: If the variable is unset or empty.
    """
    value = os.getenv(key)
    if not value:
        raise ConfigError(f"Environment variable {key} is not set")
    return value


def parse_id_list(raw: str) -> list[int]:
    """Parse a comma separated list of Discord snowflakes."""
    try:
        return [int(part.strip()) for part in raw.split(",") if part.strip()]
    except ValueError as e:
        raise ConfigError(f"Invalid id list: {raw!r}") from e


# malformed values found while loading, reported by validate()
_errors: list[str] = []


def _number_env(key: str, default: str, cast):
    raw = os.getenv(key, default)
    try:
        return cast(raw)
    except ValueError:
        _errors.append(f"{key}={raw!r} is not a valid {cast.__name__}")
        return cast(default)


def _id_list_env(key: str) -> list[int]:
    try:
        return parse_id_list(os.getenv(key, ""))
    except ConfigError as e:
        _errors.append(f"{key}: {e}")
        return []


def validate() -> None:
    """
    Fail if any setting could not be parsed.

    Raises:
        ConfigError: Listing every malformed setting.
    """
    if _errors:
        raise ConfigError("Invalid settings: " + "; ".join(_errors))


# ── Discord ───────────────────────────────────────────────
DISCORD_TOKEN: str = os.getenv("DISCORD_TOKEN", "")
BOT_ACTIVITY: str = os.getenv("BOT_ACTIVITY", "Google Drive")

# ── Google Drive ──────────────────────────────────────────
APPLICATION_NAME: str = "gdrive4discord"
GOOGLE_CREDENTIALS: str = os.getenv("GOOGLE_CREDENTIALS", "")
GOOGLE_TOKENS_DIR: str = os.getenv("GOOGLE_TOKENS_DIR", ".tokens")
OAUTH_PORT: int = _number_env("OAUTH_PORT", "8888", int)
DRIVE_MAX_RETRIES: int = _number_env("DRIVE_MAX_RETRIES", "3", int)
DRIVE_RETRY_DELAY_SECONDS: float = _number_env("DRIVE_RETRY_DELAY_SECONDS", "2.0", float)

# ── Embeds ────────────────────────────────────────────────
# How many messages after a source message are searched for our embeds.
HISTORY_SIZE: int = _number_env("HISTORY_SIZE", "5", int)
MAX_RETRIES: int = _number_env("MAX_RETRIES", "3", int)
RETRY_DELAY_SECONDS: float = _number_env("RETRY_DELAY_SECONDS", "3", float)

# ── Security ──────────────────────────────────────────────
ALLOWED_GUILD_IDS: list[int] = _id_list_env("ALLOWED_GUILD_IDS")

# ── Rate Limiting ─────────────────────────────────────────
RATE_LIMIT_MESSAGES: int = _number_env("RATE_LIMIT_MESSAGES", "20", int)
RATE_LIMIT_WINDOW_SECONDS: int = _number_env("RATE_LIMIT_WINDOW_SECONDS", "60", int)

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
