from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    route_path: str = "/health"

    # Probing
    probe_timeout_seconds: float = 10.0
    disk_path: str = "/"

    # Checks definition (YAML, see statusmake.health.inspection)
    inspection_file: str = "inspection.yaml"

    # Logging
    log_level: str = "INFO"


settings = Settings()
