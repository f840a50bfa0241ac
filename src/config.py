"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    # Separate level for src.core.tarokka (e.g. DEBUG to trace fallbacks)
    TAROKKA_LOG_LEVEL: Optional[str] = None

    # Tarokka data source
    TAROKKA_DATA_DIR: str = "src/data/tarokka"
    TAROKKA_DECK_FILE: str = "tarokka_deck.json"
    TAROKKA_CONFIG_FILE: str = "reading_config.json"

    # Tome slot snapshot: False keeps the holy symbol card's description
    # (existing saved readings depend on it), True uses the tome card's own.
    TAROKKA_TOME_OWN_DESCRIPTION: bool = False


settings = Settings()
