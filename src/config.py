from __future__ import annotations

from functools import cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class AppSettings(BaseSettings):
    log_level: LogLevel = "WARNING"
    log_format: str = DEFAULT_LOG_FORMAT
    amount_decimal_places: int = Field(default=4, ge=0, le=28)

    model_config = SettingsConfigDict(
        env_prefix="PAYMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


@cache
def config() -> AppSettings:
    return AppSettings()
