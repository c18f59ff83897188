"""Centralized configuration using Pydantic Settings."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration loaded from ``TOKEN_SUM_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TOKEN_SUM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    service_name: str = Field(default="token-sum-field", min_length=1, description="Service name reported in traces")

    # Logging
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", description="Root logging level"
    )
    log_json: bool = Field(default=True, description="Emit structured JSON logs")
    logger_levels: dict[str, str] = Field(
        default_factory=dict,
        description='Per-logger level overrides as JSON, e.g. {"token_sum_field.mapper": "debug"}',
    )
    trace_categories: list[str] = Field(
        default_factory=list,
        description='Loggers set to trace_level for deep debugging, as JSON, e.g. ["token_sum_field.mapper"]',
    )
    trace_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="debug", description="Level applied to trace_categories loggers"
    )

    # Tracing
    tracing_enabled: bool = Field(default=False, description="Install an OpenTelemetry tracer provider on startup")

    @field_validator("log_level", "trace_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value
