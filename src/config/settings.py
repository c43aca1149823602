"""
FlagQuest - Application Settings

Loads configuration from environment variables (and an optional .env file)
using Pydantic Settings.
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings

from src.engine.base import Powerups, SessionRules


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Storage
    storage_backend: Literal["memory", "file", "supabase"] = "memory"
    storage_key: str = "flagquest_user"
    storage_dir: str = ".flagquest"

    # Supabase (only needed for the supabase backend)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Session rules
    question_count: int = 10
    daily_question_count: int = 5
    starting_lives: int = 3
    survival_lives: int = 1
    timed_seconds: int = 60
    feedback_delay: float = 1.0
    fact_delay: float = 0.5
    fifty_fifty_uses: int = 2
    skip_uses: int = 1
    hint_uses: int = 2

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "FLAGQUEST_",
        "extra": "ignore",
    }

    def session_rules(self) -> SessionRules:
        """Engine rules built from these settings."""
        return SessionRules(
            question_count=self.question_count,
            daily_question_count=self.daily_question_count,
            starting_lives=self.starting_lives,
            survival_lives=self.survival_lives,
            timed_seconds=self.timed_seconds,
            feedback_delay=self.feedback_delay,
            fact_delay=self.fact_delay,
            powerups=Powerups(
                fifty_fifty=self.fifty_fifty_uses,
                skip=self.skip_uses,
                hint=self.hint_uses,
            ),
        )


def configure_logging(settings: Settings) -> None:
    """Root logging setup; debug mode forces DEBUG level."""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
