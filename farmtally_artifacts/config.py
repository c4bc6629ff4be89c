"""Runtime configuration — env-driven, read once per CLI invocation.

Settings come from ``FARMTALLY_ARTIFACTS_*`` environment variables or a
``.env`` file. The two CI inputs keep their conventional names:
``BUILD_NUMBER`` and ``BUILD_ENV``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from farmtally_artifacts.models.retention import (
    DEFAULT_MAX_ARTIFACTS,
    DEFAULT_RETENTION_DAYS,
    RetentionConfig,
)


class ArtifactSettings(BaseSettings):
    """Artifact manager configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export FARMTALLY_ARTIFACTS_STORE_PATH=/mnt/ci/artifacts
        export FARMTALLY_ARTIFACTS_RETENTION_DAYS=14
        export BUILD_NUMBER=482
        export BUILD_ENV=staging
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FARMTALLY_ARTIFACTS_",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Layout
    project_root: Path = Path(".")
    store_path: Path = Path("artifacts")
    frontend_dir: Path = Path("farmtally-frontend")

    # Build inputs supplied by CI
    build_number: str | None = Field(
        default=None,
        validation_alias=AliasChoices("BUILD_NUMBER", "FARMTALLY_ARTIFACTS_BUILD_NUMBER"),
    )
    build_environment: str = Field(
        default="production",
        validation_alias=AliasChoices("BUILD_ENV", "FARMTALLY_ARTIFACTS_BUILD_ENVIRONMENT"),
    )

    # Retention policy defaults
    retention_days: int = DEFAULT_RETENTION_DAYS
    max_artifacts: int = DEFAULT_MAX_ARTIFACTS

    # Runtime
    log_level: str = "INFO"
    max_workers: int = 2

    def retention_config(self, **overrides: object) -> RetentionConfig:
        """Build an explicit ``RetentionConfig`` from these settings.

        Keyword overrides whose value is ``None`` are ignored so CLI options
        can be passed straight through.
        """
        values: dict[str, object] = {
            "retention_days": self.retention_days,
            "max_artifacts": self.max_artifacts,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RetentionConfig(**values)


def get_settings(**overrides: object) -> ArtifactSettings:
    """Load settings from the environment, applying explicit overrides."""
    return ArtifactSettings(**{k: v for k, v in overrides.items() if v is not None})
