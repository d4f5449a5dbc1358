"""
Application settings.

Read once from environment variables prefixed with CHESSMATE_ (ex. CHESSMATE_DATABASE_URL).
"""

import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, field_validator

from chessmate.core.shared_types import Difficulty

ENV_PREFIX = "CHESSMATE_"


class Settings(BaseModel):
    database_url: str = "sqlite:///./chessmate.db"
    log_level: str = "INFO"
    default_difficulty: Difficulty = Difficulty.MEDIUM
    # fixes the computer opponent's random choices (handy for demos and reproducing games)
    ai_seed: Optional[int] = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> "Settings":
        """Collect the fields that are set in the environment, the rest keeps its default."""
        values = {
            name: os.environ[ENV_PREFIX + name.upper()]
            for name in cls.model_fields
            if ENV_PREFIX + name.upper() in os.environ
        }
        return cls(**values)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
