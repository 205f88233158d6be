"""
Global configuration shared by every entrypoint of the data generator.

Provides:
- OTEL settings
- Generic service-level runtime settings (log level, summary output)

Generator-specific settings (counts, probabilities, seed, output) live in
`apps.generator.src.core.config` and must NOT be added here.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
DEFAULT_ENV_PATH: Path = PROJECT_ROOT / ".env"


class OTELConfig(BaseSettings):
    """OpenTelemetry configuration."""

    service_name: str = Field(
        default_factory=lambda: os.getenv("OTEL_SERVICE_NAME", "cdp-datagen")
    )
    # None falls back to OTEL_EXPORTER_OTLP_ENDPOINT.
    otlp_endpoint: Optional[str] = Field(default=None)
    resource_attributes: str = Field(
        default_factory=lambda: os.getenv(
            "OTEL_RESOURCE_ATTRIBUTES", "deployment.environment=local"
        )
    )

    model_config = SettingsConfigDict(extra="ignore")


class ServiceConfig(BaseSettings):
    """Generic service-level config."""

    log_level: str = Field(default="INFO")
    debug: bool = Field(default=False)
    show_summary: bool = Field(
        default=True,
        description="Log a generation summary once the run completes.",
    )

    model_config = SettingsConfigDict(extra="ignore")

    def resolve_log_level(self) -> int:
        """
        Convert the configured level name to a numeric logging constant.

        `debug` forces DEBUG regardless of `log_level`.
        """
        if self.debug:
            return logging.DEBUG
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        return level if isinstance(level, int) else logging.INFO


class AppConfig(BaseSettings):
    """Root global configuration object."""

    otel: OTELConfig = Field(default_factory=OTELConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    @lru_cache(maxsize=1)
    def load(cls) -> "AppConfig":
        try:
            env_file = str(DEFAULT_ENV_PATH) if DEFAULT_ENV_PATH.exists() else None
            return cls(_env_file=env_file)
        except ValidationError as exc:
            raise RuntimeError("Invalid configuration values.") from exc
