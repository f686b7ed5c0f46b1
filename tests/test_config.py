"""Tests for configuration parsing and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from snaphockey_ai.config import AnalyzerConfig, get_config, update_config


class TestAnalyzerConfig:
    def test_defaults(self, monkeypatch):
        for var in ("GEMINI_MODEL", "GEMINI_REQUEST_TIMEOUT", "MLFLOW_TRACKING_URI"):
            monkeypatch.delenv(var, raising=False)
        cfg = AnalyzerConfig.from_env()
        assert cfg.model == "gemini-2.5-flash"
        assert cfg.request_timeout == 180.0
        assert cfg.validation_timeout == 120.0
        assert cfg.tracing_enabled is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("GEMINI_REQUEST_TIMEOUT", "60")
        monkeypatch.setenv("SNAPHOCKEY_VALIDATION_TIMEOUT", "30")
        monkeypatch.setenv("SNAPHOCKEY_ENVIRONMENT", "Production")
        cfg = AnalyzerConfig.from_env()
        assert cfg.request_timeout == 60.0
        assert cfg.validation_timeout == 30.0
        assert cfg.environment == "production"
        assert cfg.build_type == "release"

    def test_frame_rates_are_not_configurable(self):
        assert "analysis_fps" not in AnalyzerConfig.model_fields
        assert "validation_fps" not in AnalyzerConfig.model_fields

    def test_development_is_debug_build(self):
        assert AnalyzerConfig().build_type == "debug"

    def test_tracing_follows_tracking_uri(self, monkeypatch):
        monkeypatch.setenv("MLFLOW_TRACKING_URI", "http://localhost:5000")
        monkeypatch.setenv("SNAPHOCKEY_TRACING_ENABLED", "")
        assert AnalyzerConfig.from_env().tracing_enabled is True
        monkeypatch.setenv("SNAPHOCKEY_TRACING_ENABLED", "false")
        assert AnalyzerConfig.from_env().tracing_enabled is False

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError, match="Timeouts"):
            AnalyzerConfig(request_timeout=0)

    def test_unknown_environment(self):
        with pytest.raises(ValidationError, match="Invalid environment"):
            AnalyzerConfig(environment="qa")


class TestConfigSingleton:
    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_update_config_patches_live_config(self):
        before = get_config().request_timeout
        updated = update_config(model="gemini-test", request_timeout=None)
        assert updated.model == "gemini-test"
        assert updated.request_timeout == before
        assert get_config() is updated

    def test_dotenv_loaded_on_first_access(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GEMINI_MODEL", "")
        env = tmp_path / "config.env"
        env.write_text("GEMINI_MODEL=gemini-from-file\n")
        monkeypatch.setattr("snaphockey_ai.dotenv.DEFAULT_ENV_PATH", env)
        assert get_config().model == "gemini-from-file"
