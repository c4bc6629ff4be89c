"""Tests for ArtifactSettings — defaults and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from farmtally_artifacts.config import ArtifactSettings, get_settings

_ENV_VARS = (
    "BUILD_NUMBER",
    "BUILD_ENV",
    "FARMTALLY_ARTIFACTS_BUILD_NUMBER",
    "FARMTALLY_ARTIFACTS_BUILD_ENVIRONMENT",
    "FARMTALLY_ARTIFACTS_STORE_PATH",
    "FARMTALLY_ARTIFACTS_RETENTION_DAYS",
    "FARMTALLY_ARTIFACTS_MAX_ARTIFACTS",
    "FARMTALLY_ARTIFACTS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    # Keep any developer .env out of the picture.
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_defaults(self):
        settings = ArtifactSettings()
        assert settings.store_path == Path("artifacts")
        assert settings.project_root == Path(".")
        assert settings.frontend_dir == Path("farmtally-frontend")
        assert settings.build_number is None
        assert settings.build_environment == "production"
        assert settings.retention_days == 30
        assert settings.max_artifacts == 50
        assert settings.log_level == "INFO"


class TestEnvironmentOverrides:
    def test_ci_variables(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BUILD_NUMBER", "482")
        monkeypatch.setenv("BUILD_ENV", "staging")
        settings = ArtifactSettings()
        assert settings.build_number == "482"
        assert settings.build_environment == "staging"

    def test_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FARMTALLY_ARTIFACTS_STORE_PATH", "/mnt/ci/artifacts")
        monkeypatch.setenv("FARMTALLY_ARTIFACTS_RETENTION_DAYS", "14")
        settings = ArtifactSettings()
        assert settings.store_path == Path("/mnt/ci/artifacts")
        assert settings.retention_days == 14

    def test_dotenv_file(self, tmp_path: Path):
        (tmp_path / ".env").write_text("FARMTALLY_ARTIFACTS_MAX_ARTIFACTS=7\n")
        assert ArtifactSettings().max_artifacts == 7


class TestOverrides:
    def test_get_settings_ignores_none(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FARMTALLY_ARTIFACTS_STORE_PATH", "/from/env")
        settings = get_settings(store_path=None, build_number="9")
        assert settings.store_path == Path("/from/env")
        assert settings.build_number == "9"

    def test_retention_config(self):
        settings = ArtifactSettings(retention_days=10, max_artifacts=5)
        config = settings.retention_config(max_artifacts=None, dry_run=True)
        assert config.retention_days == 10
        assert config.max_artifacts == 5
        assert config.dry_run is True
