from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="MEALWISE_LOG_LEVEL")
    log_file: str | None = Field(
        default=None,
        validation_alias="MEALWISE_LOG_FILE",
        description="Optional path for a rotating log file (console only when unset)",
    )
    regeneration_max_attempts: int = Field(
        default=3,
        ge=1,
        validation_alias="MEALWISE_REGENERATION_MAX_ATTEMPTS",
        description="Generate/validate attempts before a regeneration gives up",
    )
    regeneration_retry_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        validation_alias="MEALWISE_REGENERATION_RETRY_DELAY_SECONDS",
        description="Pause between failed regeneration attempts",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value


settings = Settings()
