"""
Application configuration.

Centralized configuration management with environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

# Each nesting level costs about five frames of the recursive descent
MAX_DEPTH_LIMIT = 150


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Advanced Calculator"
    APP_VERSION: str = "0.1.0"

    # Evaluator
    # 0 disables the nesting guard; the bound keeps it under the interpreter stack
    MAX_DEPTH: int = Field(default=100, ge=0, le=MAX_DEPTH_LIMIT)
    REQUIRE_FULL_INPUT: bool = True
    CONTEXT_FILE: Optional[str] = None

    # REPL
    PROMPT: str = "> "
    PRECISION: int = 12  # significant digits

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None

    class Config:
        env_prefix = "ADVCALC_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
