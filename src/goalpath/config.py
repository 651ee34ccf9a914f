"""Configuration loaded from the environment (and an optional .env file)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_SESSION_COOKIE = "goalpath_sid"
DEFAULT_MAX_SESSIONS = 500


class ConfigError(Exception):
    """Required configuration is missing or malformed."""


@dataclass
class Settings:
    """Runtime settings for the web app and CLI."""

    supabase_url: str
    supabase_key: str
    log_level: str = "INFO"
    session_cookie: str = DEFAULT_SESSION_COOKIE
    max_sessions: int = DEFAULT_MAX_SESSIONS


def load_settings(env_file: Path | None = None) -> Settings:
    """Read settings from environment variables.

    Values already in the environment win over those in ``env_file``.
    """
    load_dotenv(env_file)

    url = os.getenv("SUPABASE_URL", "").strip()
    key = os.getenv("SUPABASE_KEY", "").strip()
    if not url or not key:
        raise ConfigError("SUPABASE_URL and SUPABASE_KEY must be set")

    max_sessions = os.getenv("GOALPATH_MAX_SESSIONS", str(DEFAULT_MAX_SESSIONS))
    try:
        max_sessions = int(max_sessions)
    except ValueError as e:
        raise ConfigError(f"GOALPATH_MAX_SESSIONS must be an integer, got {max_sessions!r}") from e

    return Settings(
        supabase_url=url,
        supabase_key=key,
        log_level=os.getenv("GOALPATH_LOG_LEVEL", "INFO").upper(),
        session_cookie=os.getenv("GOALPATH_SESSION_COOKIE", DEFAULT_SESSION_COOKIE),
        max_sessions=max_sessions,
    )
