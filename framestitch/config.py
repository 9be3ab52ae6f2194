"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    framestitch_env: str = "development"
    framestitch_log_level: str = "info"

    # Coincidence tolerance for connection finding and reconnection (mm)
    framestitch_tolerance: float = 0.01

    # Worker threads used by the CLI when several sizes are requested
    framestitch_max_workers: int = 4

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
