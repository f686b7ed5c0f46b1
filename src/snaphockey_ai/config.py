"""Analyzer configuration via environment variables."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

VALID_ENVIRONMENTS = {"development", "staging", "production"}


def _resolve_tracing_enabled(flag_value: str, tracking_uri: str) -> bool:
    """Tracing is on when a tracking URI is set, unless explicitly disabled."""
    if flag_value.lower() == "false":
        return False
    return bool(tracking_uri)


class AnalyzerConfig(BaseModel):
    """Runtime configuration resolved from environment."""

    gemini_api_key: str = Field(default="")
    model: str = Field(default="gemini-2.5-flash")
    request_timeout: float = Field(default=180.0)
    validation_timeout: float = Field(default=120.0)
    store_path: str = Field(default="")
    environment: str = Field(default="development")
    tracing_enabled: bool = Field(default=False)
    mlflow_tracking_uri: str = Field(default="")
    mlflow_experiment_name: str = Field(default="snaphockey-ai")

    @field_validator("request_timeout", "validation_timeout")
    @classmethod
    def validate_timeouts(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Timeouts must be > 0")
        return value

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, value: str) -> str:
        env = value.strip().lower()
        if env not in VALID_ENVIRONMENTS:
            allowed = ", ".join(sorted(VALID_ENVIRONMENTS))
            raise ValueError(f"Invalid environment '{value}'. Allowed: {allowed}")
        return env

    @property
    def build_type(self) -> str:
        return "debug" if self.environment == "development" else "release"

    @classmethod
    def from_env(cls) -> AnalyzerConfig:
        """Build config from environment variables."""
        store_default = str(Path.home() / ".local" / "share" / "snaphockey-ai" / "store.db")
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            request_timeout=float(os.getenv("GEMINI_REQUEST_TIMEOUT", "180")),
            validation_timeout=float(os.getenv("SNAPHOCKEY_VALIDATION_TIMEOUT", "120")),
            store_path=os.getenv("SNAPHOCKEY_STORE_PATH", store_default),
            environment=os.getenv("SNAPHOCKEY_ENVIRONMENT", "development"),
            tracing_enabled=_resolve_tracing_enabled(
                os.getenv("SNAPHOCKEY_TRACING_ENABLED", ""),
                os.getenv("MLFLOW_TRACKING_URI", ""),
            ),
            mlflow_tracking_uri=os.getenv("MLFLOW_TRACKING_URI", ""),
            mlflow_experiment_name=os.getenv("MLFLOW_EXPERIMENT_NAME", "snaphockey-ai"),
        )


_config: AnalyzerConfig | None = None


def get_config() -> AnalyzerConfig:
    """Return the global config singleton, creating it on first access.

    Loads ``~/.config/snaphockey-ai/.env`` before reading env vars.
    Process environment always takes precedence over the config file.
    """
    global _config
    if _config is None:
        import logging

        from .dotenv import load_dotenv

        injected = load_dotenv()
        if injected:
            logging.getLogger(__name__).info(
                "Loaded %d var(s) from config: %s",
                len(injected),
                ", ".join(injected.keys()),
            )
        _config = AnalyzerConfig.from_env()
    return _config


def update_config(**overrides: object) -> AnalyzerConfig:
    """Patch the live config."""
    global _config
    data = get_config().model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    _config = AnalyzerConfig(**data)
    return _config
