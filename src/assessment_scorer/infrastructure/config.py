"""Application configuration: loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: SecretStr | None = None
    repository_strategy: Literal["clone", "api"] = "clone"
    clone_workspace_dir: str = "/tmp/repo-analysis"
    clone_timeout_seconds: float = 300.0
    git_executable: str = "git"
    http_timeout_seconds: float = 30.0
    max_file_size_kb: int = 200
    max_content_files: int = 200
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
