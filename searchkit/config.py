"""Runtime configuration based on environment variables."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DebouncePolicy(str, Enum):
    """How ``search`` calls for different queries share debounce windows."""

    PER_KEY = "per_key"
    GLOBAL = "global"


class CoordinatorOptions(BaseModel):
    debounce_time_ms: int = Field(default=400, ge=0, description="Quiet period before a first-page fetch.")
    max_queries: int = Field(default=200, ge=1, description="Distinct queries kept in the page cache.")
    default_limit: int = Field(default=10, ge=1)
    debounce_policy: DebouncePolicy = DebouncePolicy.PER_KEY

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_time_ms / 1000


class HttpFetcherSettings(BaseModel):
    base_url: AnyHttpUrl | None = None
    api_key: SecretStr | None = None
    query_param: str = Field(default="q", min_length=1)
    limit_param: str = Field(default="limit", min_length=1)
    offset_param: str = Field(default="offset", min_length=1)
    items_field: str = Field(default="items", min_length=1)
    total_field: str = Field(default="total", min_length=1)
    request_timeout_seconds: int = Field(default=10, ge=1, le=120)
    max_attempts: int = Field(default=3, ge=1, le=10)
    retry_base_delay: float = Field(default=0.5, ge=0)

    @field_validator("base_url", "api_key", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SearchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"

    coordinator: CoordinatorOptions = Field(default_factory=CoordinatorOptions)
    http: HttpFetcherSettings = Field(default_factory=HttpFetcherSettings)


@lru_cache
def get_settings() -> SearchSettings:
    """Return cached settings instance."""

    return SearchSettings()


__all__ = [
    "CoordinatorOptions",
    "DebouncePolicy",
    "HttpFetcherSettings",
    "SearchSettings",
    "get_settings",
]
