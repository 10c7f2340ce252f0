from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, overridable through HELPDESK_* environment variables."""
    model_config = SettingsConfigDict(env_prefix="HELPDESK_", env_file=".env", extra="ignore")

    APP_NAME: str = "Mesa de Ayuda IT"
    VERSION: str = "0.1.0"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # First ticket gets TICKET_ID_BASE + 1
    TICKET_ID_BASE: int = 1000
    SEED_SAMPLE_TICKET: bool = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
