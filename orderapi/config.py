"""Software-only simulation / demo - no real systems will be contacted or modified."""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)

    app_name: str = Field(default="Order Token Gate", alias="APP_NAME")
    token_limit: int = Field(default=5, alias="TOKEN_LIMIT", ge=1)
    token_window_seconds: int = Field(default=3600, alias="TOKEN_WINDOW_SECONDS", gt=0)
    token_usage_limit: int = Field(default=5, alias="TOKEN_USAGE_LIMIT", ge=1)
    token_expiry_margin_seconds: int = Field(default=5, alias="TOKEN_EXPIRY_MARGIN_SECONDS", ge=0)
    redact_inactive_token: bool = Field(default=False, alias="REDACT_INACTIVE_TOKEN")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        level = str(value).strip().upper()
        if level == "WARN":
            level = "WARNING"
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level


@lru_cache()
def get_settings() -> Settings:
    return Settings()
