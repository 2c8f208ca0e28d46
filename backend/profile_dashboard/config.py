from functools import lru_cache
from typing import Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

# Pipeline limits
PAGE_SIZE = 100
MAX_PAGES = 5
LANGUAGE_SAMPLE_SIZE = 20
TOP_PROJECTS = 6
TOP_LANGUAGES = 8
ACTIVITY_MONTHS = 12
COUNTER_DURATION_MS = 600


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # ignore unrelated env vars to avoid validation errors
    )

    # optional; only raises the anonymous rate limit
    github_token: Optional[str] = Field(default=None, alias="GITHUB_TOKEN")
    github_base_url: HttpUrl = Field(
        default="https://api.github.com", alias="GITHUB_BASE_URL"
    )
    github_api_version: str = Field(default="2022-11-28", alias="GITHUB_API_VERSION")
    github_proxy: Optional[str] = Field(default=None, alias="GITHUB_PROXY")
    request_timeout: float = Field(default=20.0, alias="REQUEST_TIMEOUT")
    max_sessions: int = Field(default=256, ge=1, alias="MAX_SESSIONS")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    quick_picks: list[str] = Field(
        default=["torvalds", "gaearon", "sindresorhus", "yyx990803"], alias="QUICK_PICKS"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
