"""Artifact verifier — recompute archive checksums and compare.

Read-only: corrupted data is reported, never repaired or removed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from farmtally_artifacts.core.hasher import checksums_match, read_checksum_file, sha256_file
from farmtally_artifacts.core.layout import METADATA_DIR, ArtifactDirectoryManager
from farmtally_artifacts.models.reports import VerificationResult

logger = logging.getLogger(__name__)


def component_dirs(artifact_root: Path) -> list[Path]:
    """Component subdirectories of an artifact, excluding reserved ones."""
    return [
        path
        for path in sorted(Path(artifact_root).iterdir())
        if path.is_dir() and path.name != METADATA_DIR and not path.name.startswith(".")
    ]


class ArtifactVerifier:
    """Checks every component archive of a stored artifact.

    Errors are accumulated across components so one call reports every
    problem.
    """

    def __init__(self, store_path: Path) -> None:
        self._layout = ArtifactDirectoryManager(store_path)

    def verify_component(self, component_dir: Path) -> str | None:
        """Return an error message for one component, or ``None`` if intact."""
        name = component_dir.name
        label = name.capitalize()
        checksum_file = component_dir / f"{name}.sha256"
        archive = component_dir / f"{name}.tar.gz"

        if not checksum_file.is_file():
            return f"{label} checksum file missing"
        if not archive.is_file():
            return f"{label} archive missing"

        try:
            expected = read_checksum_file(checksum_file)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("%s: cannot read checksum file: %s", name, exc)
            return f"{label} checksum file unreadable"
        try:
            actual = sha256_file(archive)
        except OSError as exc:
            logger.debug("%s: cannot read archive: %s", name, exc)
            return f"{label} integrity check failed"
        if not checksums_match(expected, actual):
            logger.debug("%s: expected %s, got %s", name, expected, actual)
            return f"{label} integrity check failed"
        return None

    def verify(self, artifact_name: str) -> VerificationResult:
        """Verify *artifact_name*; raises ``ArtifactNotFoundError`` if absent."""
        root = self._layout.require_artifact(artifact_name)

        errors: list[str] = []
        for component_dir in component_dirs(root):
            error = self.verify_component(component_dir)
            if error:
                errors.append(error)

        result = VerificationResult(artifact_name=artifact_name, errors=errors)
        if result.is_valid:
            logger.info("Artifact %s verified", artifact_name)
        else:
            logger.warning(
                "Artifact %s failed verification: %s", artifact_name, "; ".join(errors)
            )
        return result
