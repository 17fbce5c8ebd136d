from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    default_currency: str = Field("USD", alias="DEFAULT_CURRENCY")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    strict_zero_sum: bool = Field(False, alias="STRICT_ZERO_SUM")
    zero_sum_tolerance: float = Field(0.01, alias="ZERO_SUM_TOLERANCE", ge=0)

    @field_validator("default_currency", "log_level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
