"""Artifact catalog — advisory, newest-first listing from manifests.

Directories without a readable manifest (still being written, or tampered
with) are omitted rather than reported as errors.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from farmtally_artifacts.core.errors import ArtifactNotFoundError
from farmtally_artifacts.core.layout import (
    MANIFEST_FILE,
    ArtifactDirectoryManager,
    iter_artifact_dirs,
)
from farmtally_artifacts.models.identity import UNKNOWN
from farmtally_artifacts.models.reports import ArtifactSummary

logger = logging.getLogger(__name__)


def read_manifest(artifact_root: Path) -> dict[str, Any] | None:
    """Parse ``manifest.json`` under *artifact_root*, or ``None`` if unusable."""
    path = Path(artifact_root) / MANIFEST_FILE
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("Ignoring %s: %s", artifact_root.name, exc)
        return None
    return data if isinstance(data, dict) else None


def summarize(artifact_root: Path, data: dict[str, Any]) -> ArtifactSummary | None:
    """Build a catalog row from parsed manifest data, or ``None`` if invalid."""
    git = data.get("git")
    commit = git.get("shortCommit", UNKNOWN) if isinstance(git, dict) else UNKNOWN
    try:
        summary = ArtifactSummary(
            name=artifact_root.name,
            version=data["version"],
            timestamp=data["timestamp"],
            commit=commit,
        )
        summary.built_at  # noqa: B018  rejects unparseable timestamps
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        logger.debug("Ignoring %s: invalid manifest (%s)", artifact_root.name, exc)
        return None
    return summary


class ArtifactCatalog:
    """Lists the artifacts in a store."""

    def __init__(self, store_path: Path) -> None:
        self._layout = ArtifactDirectoryManager(store_path)

    def list(self) -> list[ArtifactSummary]:
        """All complete artifacts, newest manifest timestamp first."""
        summaries: list[ArtifactSummary] = []
        for root in iter_artifact_dirs(self._layout.store_path):
            data = read_manifest(root)
            if data is None:
                continue
            summary = summarize(root, data)
            if summary is not None:
                summaries.append(summary)
        return sorted(summaries, key=lambda s: s.built_at, reverse=True)

    def get(self, artifact_name: str) -> dict[str, Any]:
        """Return the raw manifest of *artifact_name*.

        Raises ``ArtifactNotFoundError`` if the artifact is absent or has no
        readable manifest (i.e. is incomplete).
        """
        root = self._layout.require_artifact(artifact_name)
        data = read_manifest(root)
        if data is None:
            raise ArtifactNotFoundError(
                f"Artifact {artifact_name} has no readable manifest"
            )
        return data
