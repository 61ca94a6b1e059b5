from functools import lru_cache
from typing import Annotated, List, Literal

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = Field(default="ColorPlan")
    cors_origins: Annotated[List[AnyHttpUrl], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:8080",
            "http://127.0.0.1:8080",
        ]
    )
    seed_sample_data: bool = Field(
        default=True
    )
    default_view_type: Literal["day", "week", "month"] = Field(
        default="week"
    )
    log_level: str = Field(
        default="INFO"
    )

    model_config = SettingsConfigDict(env_prefix="COLORPLAN_", case_sensitive=False)

    @field_validator("cors_origins", mode="before")
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
