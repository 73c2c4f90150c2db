"""Central environment-driven settings for the admin CLI.

Loaded once per process. Every field can be overridden with the matching
upper-case environment variable or a `.env` file in the working directory.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class CommonSettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "shopadmin"
    log_level: str = "INFO"
    database_url: str = "sqlite:///shop.db"
    payment_batch_policy: Literal["best_effort", "abort"] = "best_effort"
    metrics_textfile: str = ""
    otel_exporter_otlp_endpoint: str = ""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = CommonSettings()
