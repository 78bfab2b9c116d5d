"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import pendulum
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """ism-blog application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    environment: Literal["development", "production"] = "development"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)

    # Paths
    posts_dir: Path = Path("./posts")
    static_dir: Path = _PACKAGE_DIR / "static"
    templates_dir: Path = _PACKAGE_DIR / "templates"

    # Site
    site_title: str = "ism魂"
    site_description: str = "日常の出来事や散歩日記なんか書いてくブログ"
    per_page: int = Field(default=5, ge=1)
    timezone: str = "UTC"

    @property
    def enforce_https(self) -> bool:
        """Plain HTTP requests are redirected to HTTPS in production."""
        return self.environment == "production"

    def validate_runtime(self) -> None:
        """Validate settings that pydantic cannot check on its own."""
        try:
            pendulum.timezone(self.timezone)
        except (KeyError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {self.timezone}") from exc
