"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RUNWAY_",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./runway_ledger.db"
    database_echo: bool = False

    # Service
    service_name: str = "runway-ledger"
    log_level: str = "INFO"


settings = Settings()
