# openchoreo/catalog/core/config.py
"""
Central configuration for the catalog synchronization runtime.

Environment variables (prefixed ``OPENCHOREO_``) override defaults. YAML
files listed in ``config_paths`` may override the connection settings,
see :func:`openchoreo.catalog.core.loader.load_provider_config`.
"""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="OPENCHOREO_", extra="ignore"
    )

    app_env: str = "dev"
    log_level: str = "INFO"
    log_json: bool = True

    # OpenChoreo API
    base_url: str = Field(default="", description="OpenChoreo API base URL")
    token: str | None = Field(default=None, description="Bearer token for the API")
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    # Catalog output
    default_owner: str = "developers"
    template_namespace: str = "openchoreo"

    page_size: int = 100
    schema_fetch_concurrency: int = Field(
        default=10,
        description="Concurrent component-type schema fetches per organization (0 = unbounded)",
    )

    # Config file paths (glob patterns)
    config_paths: list[str] = Field(
        default_factory=lambda: ["config/openchoreo.yaml"]
    )


settings = Settings()
