import logging
import sys
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App config
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    DEBUG: bool = False

    # Rules engine
    AUTOMATIC_MOVE_LIMIT: int = 1000
    TURN_TIME_LIMIT: int = 60

    @field_validator("AUTOMATIC_MOVE_LIMIT")
    @classmethod
    def validate_automatic_move_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("AUTOMATIC_MOVE_LIMIT must be at least 1")
        return v

    @field_validator("TURN_TIME_LIMIT")
    @classmethod
    def validate_turn_time_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("TURN_TIME_LIMIT must be a positive number of seconds")
        return v


def configure_logging(debug: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    configure_logging(settings.DEBUG)
    logger.info("Settings loaded successfully")
    logger.debug("Automatic move limit: %d", settings.AUTOMATIC_MOVE_LIMIT)
    logger.debug("Turn time limit: %ds", settings.TURN_TIME_LIMIT)
    return settings
