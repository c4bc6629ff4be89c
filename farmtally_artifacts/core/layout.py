"""Artifact store layout and per-artifact directory allocation.

Layout::

    {store}/farmtally-v{build}-{commit8}/
        backend/    frontend/    metadata/
        manifest.json    ARTIFACT_INFO.txt

While a build is packaging, its directory also holds ``.packaging.lock``.
The retention enforcer takes the same lock before removing an artifact.
Allocation only ever creates; nothing here removes or recreates content.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from farmtally_artifacts.core.errors import ArtifactLockedError, ArtifactNotFoundError
from farmtally_artifacts.models.identity import ARTIFACT_PREFIX, BuildIdentity

logger = logging.getLogger(__name__)

COMPONENT_DIRS = ("backend", "frontend")
METADATA_DIR = "metadata"
MANIFEST_FILE = "manifest.json"
INFO_FILE = "ARTIFACT_INFO.txt"
LOCK_FILE = ".packaging.lock"
ARTIFACT_GLOB = f"{ARTIFACT_PREFIX}v*"


def iter_artifact_dirs(store: Path) -> Iterator[Path]:
    """Yield every directory in *store* matching the artifact naming convention."""
    store = Path(store)
    if not store.is_dir():
        return
    for path in sorted(store.glob(ARTIFACT_GLOB)):
        if path.is_dir():
            yield path


def is_locked(artifact_root: Path, stale_after_seconds: float | None = None) -> bool:
    """Return True if a packager currently holds *artifact_root*.

    A lock file older than *stale_after_seconds* is considered abandoned.
    """
    lock = Path(artifact_root) / LOCK_FILE
    try:
        mtime = lock.stat().st_mtime
    except FileNotFoundError:
        return False
    if stale_after_seconds is None:
        return True
    return (time.time() - mtime) < stale_after_seconds


def acquire_lock(artifact_root: Path) -> Path:
    """Create ``.packaging.lock`` in *artifact_root* exclusively; return its path.

    Raises ``ArtifactLockedError`` if the lock file already exists.
    """
    lock = Path(artifact_root) / LOCK_FILE
    try:
        fd = os.open(lock, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
    except FileExistsError as exc:
        raise ArtifactLockedError(
            f"Artifact {Path(artifact_root).name} is already being packaged"
        ) from exc
    try:
        os.write(fd, str(os.getpid()).encode("ascii"))
    finally:
        os.close(fd)
    logger.debug("Acquired packaging lock %s", lock)
    return lock


class ArtifactDirectoryManager:
    """Allocates artifact directories under a store root.

    Parameters
    ----------
    store_path:
        Root of the artifact store; created on first allocation.
    """

    def __init__(self, store_path: Path) -> None:
        self._store = Path(store_path)

    @property
    def store_path(self) -> Path:
        return self._store

    def artifact_path(self, artifact_name: str) -> Path:
        return self._store / artifact_name

    def require_artifact(self, artifact_name: str) -> Path:
        """Return the directory of an existing artifact or raise."""
        path = self.artifact_path(artifact_name)
        if not path.is_dir():
            raise ArtifactNotFoundError(f"Artifact not found: {artifact_name}")
        return path

    def setup_artifact_directory(self, identity: BuildIdentity) -> Path:
        """Create ``{store}/{artifact_name}/`` and its three subdirectories.

        Idempotent: existing directories and any files in them are kept.
        """
        root = self.artifact_path(identity.artifact_name)
        root.mkdir(parents=True, exist_ok=True)
        for sub in (*COMPONENT_DIRS, METADATA_DIR):
            (root / sub).mkdir(exist_ok=True)
        logger.info("Artifact directory ready: %s", root)
        return root

    @contextmanager
    def packaging_lock(self, artifact_root: Path) -> Iterator[Path]:
        """Hold the exclusive packaging lock for *artifact_root*.

        Raises ``ArtifactLockedError`` if another packager already holds it.
        """
        lock = acquire_lock(artifact_root)
        try:
            yield lock
        finally:
            lock.unlink(missing_ok=True)
            logger.debug("Released packaging lock %s", lock)
