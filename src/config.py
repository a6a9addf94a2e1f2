"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "fraud-sentinel"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool = False

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}


settings = Settings()
