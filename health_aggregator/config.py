from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Status cache window (milliseconds) for Health instances built without one
    status_expiration_ms: int = 30_000

    # HTTP adapter
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    health_path: str = "/health"

    # Logging
    log_level: str = "INFO"


settings = Settings()
