"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    mosaic_env: str = "development"
    mosaic_log_level: str = "info"

    # Output
    mosaic_output_dir: str = "."

    # Screen size used when the CLI is not given one
    mosaic_default_width: int = 1920
    mosaic_default_height: int = 1080

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
