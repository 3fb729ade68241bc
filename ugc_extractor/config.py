"""
Application configuration using pydantic-settings.
All settings read from environment variables with sensible defaults.
"""

from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration for the UGC document extraction engine."""

    # ── Application ──────────────────────────────────────────
    APP_NAME: str = "ugc-document-extraction"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ── Input limits ─────────────────────────────────────────
    MAX_UPLOAD_SIZE_MB: int = 10
    # Text beyond this is dropped before pattern matching
    MAX_TEXT_CHARS: int = 200_000
    TEXT_PREVIEW_CHARS: int = 500

    # ── Amount plausibility ──────────────────────────────────
    AMOUNT_PLAUSIBLE_MIN: Decimal = Decimal("1")
    AMOUNT_PLAUSIBLE_MAX: Decimal = Decimal("1000000")
    AMOUNT_CANDIDATE_MIN: Decimal = Decimal("10")
    AMOUNT_CANDIDATE_MAX: Decimal = Decimal("100000")

    # ── Field cleanup ────────────────────────────────────────
    CLIENT_NAME_MAX_CHARS: int = 60
    CLIENT_NAME_MAX_WORDS: int = 4
    DELIVERABLE_WINDOW_CHARS: int = 10

    # ── Known templates ──────────────────────────────────────
    ENABLE_TEMPLATE_OVERRIDES: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


# Singleton instance
settings = Settings()
