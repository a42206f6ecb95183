"""Library configuration using Pydantic Settings"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    """Library settings loaded from environment variables"""

    # Message defaults
    GCM_DEFAULT_TIME_TO_LIVE: int = 2419200  # 28 days, the backend maximum
    GCM_DEFAULT_PRIORITY: str = "high"

    # Reject empty recipient lists and empty recipient strings in build()
    GCM_STRICT_RECIPIENTS: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator('GCM_DEFAULT_PRIORITY', mode='after')
    @classmethod
    def validate_default_priority(cls, v: str) -> str:
        """Validate message priority."""
        valid_priorities = ['high', 'normal']
        if v not in valid_priorities:
            raise ValueError(f"GCM_DEFAULT_PRIORITY must be one of {valid_priorities}")
        return v

    @field_validator('LOG_LEVEL', mode='after')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize the log level name."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
