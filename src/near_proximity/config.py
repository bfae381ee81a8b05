"""Centralized configuration for near-proximity using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_ALLOWED_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Only the command-line wrapper and benchmarks read these settings; the
    window enumerator itself takes no configuration.
    """

    model_config = SettingsConfigDict(
        env_prefix="NEAR_PROXIMITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="info", description="Root logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")
    logger_levels: dict[str, str] = Field(
        default_factory=dict,
        description="Per-logger level overrides (JSON object of logger name -> level)",
    )

    # Observability
    service_name: str = Field(default="near-proximity", description="Service name reported to OpenTelemetry")
    tracing_enabled: bool = Field(default=True, description="Wrap CLI commands in OpenTelemetry spans")

    # Benchmarks
    bench_iterations: int = Field(default=1000, ge=1, description="Iterations per benchmark scenario")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in _ALLOWED_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_ALLOWED_LEVELS)}, got {value!r}")
        return normalized

    @field_validator("logger_levels")
    @classmethod
    def validate_logger_levels(cls, value: dict[str, str]) -> dict[str, str]:
        """Validate that all logger_levels values use supported log levels."""
        normalized = {name: level.strip().lower() for name, level in value.items()}
        invalid = {name: level for name, level in normalized.items() if level not in _ALLOWED_LEVELS}
        if invalid:
            details = ", ".join(f"{name}={level}" for name, level in invalid.items())
            raise ValueError(f"Unsupported logger_levels: {details}")
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
