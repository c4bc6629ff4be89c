"""Manifest generator — the final step of packaging.

Writes ``manifest.json`` and ``ARTIFACT_INFO.txt`` into the artifact root.
The manifest's presence is the completeness signal for the verifier,
catalog and retention enforcer, so it is written atomically and only after
every component descriptor exists.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from farmtally_artifacts.core.environment import BuildEnvironment
from farmtally_artifacts.core.layout import INFO_FILE, MANIFEST_FILE
from farmtally_artifacts.core.vcs import GitVcs, VcsInfo
from farmtally_artifacts.models.identity import BuildIdentity
from farmtally_artifacts.models.manifest import (
    BuildInfo,
    ComponentDescriptor,
    GitInfo,
    Manifest,
    ManifestMetadata,
)
from farmtally_artifacts.models.retention import DEFAULT_RETENTION_DAYS

logger = logging.getLogger(__name__)


def _atomic_write_text(path: Path, text: str) -> None:
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def render_artifact_info(manifest: Manifest) -> str:
    """Human-readable summary for operators without tooling."""
    lines = [
        "FarmTally Build Artifact",
        "========================",
        "",
        f"Name: {manifest.name}",
        f"Version: {manifest.version}",
        f"Build Number: {manifest.build.number}",
        f"Environment: {manifest.build.environment}",
        f"Timestamp: {manifest.timestamp}",
        "",
        "Git Information:",
        f"  Commit: {manifest.git.commit}",
        f"  Branch: {manifest.git.branch}",
        f"  Repository: {manifest.git.repository}",
        f"  Dirty: {'yes' if manifest.git.dirty else 'no'}",
        "",
        "Components:",
    ]
    for component in manifest.components:
        lines.append(
            f"  - {component.name.capitalize()}: {component.path} "
            f"({component.size} bytes, sha256 {component.checksum})"
        )
    lines += [
        "",
        "Build Environment:",
        f"  Node.js: {manifest.build.node}",
        f"  npm: {manifest.build.npm}",
        f"  Platform: {manifest.metadata.platform}",
        f"  Creator: {manifest.metadata.creator}",
        "",
    ]
    return "\n".join(lines)


class ManifestGenerator:
    """Builds and writes the manifest for a fully packaged artifact.

    Parameters
    ----------
    vcs:
        Source of repository URL and dirty flag.
    retention_days:
        Retention window recorded in ``metadata.retentionDays``.
    """

    def __init__(
        self,
        vcs: VcsInfo | None = None,
        retention_days: int = DEFAULT_RETENTION_DAYS,
    ) -> None:
        self._vcs = vcs or GitVcs()
        self._retention_days = retention_days

    def build(
        self,
        components: list[ComponentDescriptor],
        identity: BuildIdentity,
        environment: BuildEnvironment,
    ) -> Manifest:
        return Manifest(
            version=identity.artifact_version,
            name=identity.artifact_name,
            timestamp=identity.build_timestamp,
            git=GitInfo(
                commit=identity.commit_sha,
                short_commit=identity.commit_short,
                branch=identity.branch_name,
                repository=self._vcs.remote_url(),
                dirty=self._vcs.is_dirty(),
            ),
            build=BuildInfo(
                number=identity.build_number,
                environment=environment.environment,
                node=environment.node,
                npm=environment.npm,
            ),
            components=list(components),
            metadata=ManifestMetadata(
                creator=environment.creator,
                platform=environment.platform,
                retention_days=self._retention_days,
            ),
        )

    def generate(
        self,
        artifact_root: Path,
        components: list[ComponentDescriptor],
        identity: BuildIdentity,
        environment: BuildEnvironment,
    ) -> Manifest:
        """Write ``ARTIFACT_INFO.txt`` then ``manifest.json``; return the manifest."""
        artifact_root = Path(artifact_root)
        manifest = self.build(components, identity, environment)

        _atomic_write_text(artifact_root / INFO_FILE, render_artifact_info(manifest))
        _atomic_write_text(artifact_root / MANIFEST_FILE, manifest.to_json() + "\n")

        logger.info(
            "Wrote manifest for %s with %d component(s)",
            manifest.name,
            len(manifest.components),
        )
        return manifest
