"""Manifest models — the JSON record that marks an artifact complete.

Field names are snake_case in Python and camelCase on disk; always dump with
``by_alias=True`` when writing ``manifest.json``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from farmtally_artifacts.models.identity import UNKNOWN


class ComponentDescriptor(BaseModel):
    """One packaged component as recorded in the manifest.

    ``type`` currently mirrors ``name``; it is kept separate so that several
    components (e.g. multiple worker services) can share a type later.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    path: str  # relative to the artifact root
    size: int = Field(ge=0)
    checksum: str = Field(pattern=r"^[0-9a-f]{64}$")


class GitInfo(BaseModel):
    """VCS provenance. ``dirty=False`` may also mean "could not be checked"."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    commit: str = UNKNOWN
    short_commit: str = Field(default=UNKNOWN, alias="shortCommit")
    branch: str = UNKNOWN
    repository: str = UNKNOWN
    dirty: bool = False


class BuildInfo(BaseModel):
    """Build number, target environment and best-effort toolchain versions."""

    model_config = ConfigDict(frozen=True)

    number: str
    environment: str = "production"
    node: str = UNKNOWN
    npm: str = UNKNOWN


class ManifestMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    creator: str = UNKNOWN
    platform: str = UNKNOWN
    retention_days: int = Field(default=30, alias="retentionDays")


class Manifest(BaseModel):
    """Top-level ``manifest.json`` document, written once per artifact."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str
    name: str
    timestamp: str
    git: GitInfo
    build: BuildInfo
    components: list[ComponentDescriptor]
    metadata: ManifestMetadata

    def to_json(self) -> str:
        """Serialize with on-disk (camelCase) keys, 2-space indented."""
        return self.model_dump_json(by_alias=True, indent=2)
