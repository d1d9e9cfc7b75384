"""Configuration management for Orchestra using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from orchestra.core.enums import ProviderKind
from orchestra.core.exceptions import ConfigurationError


class ProviderConfig(BaseModel):
    """Connection settings for a single provider."""

    api_key: str
    endpoint: str | None = None
    model: str | None = None
    max_tokens: int | None = Field(default=None, ge=1)
    temperature: float | None = Field(default=None, ge=0, le=2)
    kind: ProviderKind = ProviderKind.SIMULATED

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("api_key must not be empty")
        return v


class OrchestraSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ORCHESTRA_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    providers: dict[str, ProviderConfig] = Field(default_factory=dict)
    default_provider: str | None = None
    consensus_threshold: float | None = Field(default=None, ge=0, le=1)
    max_debate_rounds: int | None = Field(default=None, ge=1)
    timeout: float | None = Field(default=None, gt=0)  # milliseconds
    cache: bool = False

    # Logging
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def provider_names(self) -> list[str]:
        """Configured provider names in declaration order."""
        return list(self.providers)


def build_provider_config(data: ProviderConfig | dict[str, Any]) -> ProviderConfig:
    """Validate raw provider settings, raising ConfigurationError on failure."""
    if isinstance(data, ProviderConfig):
        return data
    try:
        return ProviderConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid provider configuration: {e.errors()[0]['msg']}",
            details={"fields": [".".join(map(str, err["loc"])) for err in e.errors()]},
        ) from e


def build_settings(**values: Any) -> OrchestraSettings:
    """Build settings from keyword values, raising ConfigurationError on failure."""
    try:
        return OrchestraSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid Orchestra configuration: {e.errors()[0]['msg']}",
            details={"fields": [".".join(map(str, err["loc"])) for err in e.errors()]},
        ) from e


def load_settings(path: Path | str) -> OrchestraSettings:
    """
    Load settings from a YAML file.

    Environment variables still apply for any key the file leaves unset.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping, got {type(data).__name__}",
            details={"path": str(path)},
        )

    return build_settings(**data)


@lru_cache
def get_settings() -> OrchestraSettings:
    """Get cached settings instance."""
    return OrchestraSettings()
