"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    beadrope_env: str = "development"
    beadrope_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Editor engine
    history_capacity: int = 100
    print_chunk_size: int = 100

    # Storage
    data_dir: str = ""
    max_recent_files: int = 12

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
