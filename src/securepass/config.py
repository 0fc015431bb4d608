"""
Application configuration with environment overrides.
"""

import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Defaults for the analysis engine and the web app."""

    # Breach provider (k-anonymity range API)
    BREACH_API_URL = os.environ.get("SECUREPASS_BREACH_API_URL", "https://api.pwnedpasswords.com/range")
    BREACH_TIMEOUT = float(os.environ.get("SECUREPASS_BREACH_TIMEOUT", "5.0"))
    BREACH_CACHE_TTL = int(os.environ.get("SECUREPASS_BREACH_CACHE_TTL", "3600"))
    BREACH_CACHE_MAX_ENTRIES = int(os.environ.get("SECUREPASS_BREACH_CACHE_MAX_ENTRIES", "10000"))
    BREACH_CHECK_ENABLED = _env_bool("SECUREPASS_BREACH_CHECK_ENABLED", True)

    # Persistence
    SQLALCHEMY_DATABASE_URI = os.environ.get("SECUREPASS_DATABASE_URI", "sqlite:///securepass.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    HISTORY_LIMIT = 10

    PING_MESSAGE = os.environ.get("PING_MESSAGE", "ping")
    TESTING = False


class TestingConfig(Config):
    """In-memory database and no outbound breach lookups."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    BREACH_CHECK_ENABLED = False
