"""Retention enforcer — age-based then count-based eviction.

Only directories matching ``farmtally-v*`` are ever considered. Removal is
whole-directory: the artifact is first renamed into ``{store}/.trash/`` (so
no reader or writer can observe a half-deleted artifact under its real
name) and then deleted. The enforcer takes the packaging lock before the
rename, so a packager cannot start on an artifact being removed; artifacts
whose lock is already held and fresh are left alone.
"""

from __future__ import annotations

import logging
import os
import shutil
import time
import uuid
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from farmtally_artifacts.core.errors import ArtifactLockedError
from farmtally_artifacts.core.layout import LOCK_FILE, acquire_lock, is_locked, iter_artifact_dirs
from farmtally_artifacts.models.retention import (
    EvictionDecision,
    EvictionReason,
    RetentionConfig,
    RetentionReport,
)

logger = logging.getLogger(__name__)

TRASH_DIR = ".trash"
_SECONDS_PER_DAY = 24 * 60 * 60


class _Candidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path
    mtime: float

    @property
    def name(self) -> str:
        return self.path.name


class RetentionEnforcer:
    """Applies a ``RetentionConfig`` to an artifact store.

    Parameters
    ----------
    store_path:
        Root of the artifact store.
    clock:
        Returns the current Unix time; injectable for tests.
    """

    def __init__(self, store_path: Path, clock: Callable[[], float] = time.time) -> None:
        self._store = Path(store_path)
        self._clock = clock

    @property
    def trash_path(self) -> Path:
        return self._store / TRASH_DIR

    def _scan(self) -> list[_Candidate]:
        candidates = []
        for path in iter_artifact_dirs(self._store):
            try:
                candidates.append(_Candidate(path=path, mtime=path.stat().st_mtime))
            except FileNotFoundError:
                continue
        return candidates

    def _claim(self, candidate: _Candidate, stale_after_seconds: float) -> Path | None:
        """Take the packaging lock on *candidate*, breaking it only if stale.

        Returns the lock path, or ``None`` if a live packager holds it.
        """
        try:
            return acquire_lock(candidate.path)
        except ArtifactLockedError:
            if is_locked(candidate.path, stale_after_seconds):
                return None
        logger.warning("Breaking stale packaging lock on %s", candidate.name)
        (candidate.path / LOCK_FILE).unlink(missing_ok=True)
        try:
            return acquire_lock(candidate.path)
        except ArtifactLockedError:
            return None

    def _remove(self, candidate: _Candidate, stale_after_seconds: float) -> bool:
        """Claim *candidate*, move it out of the store namespace, then delete it.

        Returns False if a packager holds it. Raises ``OSError`` only if the
        artifact is still in the store afterwards; once moved to trash, a
        failed delete is left for the next pass to purge.
        """
        self.trash_path.mkdir(exist_ok=True)
        lock = self._claim(candidate, stale_after_seconds)
        if lock is None:
            return False
        target = self.trash_path / f"{candidate.name}.{uuid.uuid4().hex[:8]}"
        try:
            os.rename(candidate.path, target)
        except OSError:
            lock.unlink(missing_ok=True)
            raise
        try:
            shutil.rmtree(target)
        except OSError as exc:
            logger.warning("%s moved to trash but not deleted: %s", candidate.name, exc)
        return True

    def purge_trash(self) -> None:
        """Delete leftovers from earlier interrupted removals."""
        if not self.trash_path.is_dir():
            return
        for leftover in self.trash_path.iterdir():
            try:
                if leftover.is_dir():
                    shutil.rmtree(leftover)
                else:
                    leftover.unlink()
            except OSError as exc:
                logger.warning("Could not purge %s: %s", leftover, exc)

    def apply_retention_policy(self, config: RetentionConfig | None = None) -> RetentionReport:
        """Evict by age, then by count, and report every decision.

        A deletion failure is recorded against that artifact and the pass
        continues with the rest.
        """
        config = config or RetentionConfig()
        now = self._clock()
        cutoff = now - config.retention_days * _SECONDS_PER_DAY

        decisions: list[EvictionDecision] = []
        skipped: list[str] = []
        errors: list[str] = []

        if not config.dry_run:
            self.purge_trash()

        def evict(candidate: _Candidate, reason: EvictionReason) -> bool:
            stale_after = config.lock_stale_after_seconds
            if config.dry_run:
                removable = not is_locked(candidate.path, stale_after)
            else:
                try:
                    removable = self._remove(candidate, stale_after)
                except OSError as exc:
                    logger.error("Failed to remove %s: %s", candidate.name, exc)
                    errors.append(f"{candidate.name}: {exc}")
                    return False
            if not removable:
                logger.warning("Skipping %s: packaging in progress", candidate.name)
                skipped.append(candidate.name)
                return False
            age_days = round((now - candidate.mtime) / _SECONDS_PER_DAY, 2)
            logger.info(
                "%s %s (%s-based, %.1f days old)",
                "Would evict" if config.dry_run else "Evicted",
                candidate.name,
                reason.value,
                age_days,
            )
            decisions.append(
                EvictionDecision(name=candidate.name, reason=reason, age_days=age_days)
            )
            return True

        # Step 1: age
        remaining: list[_Candidate] = []
        for candidate in self._scan():
            if candidate.mtime < cutoff and evict(candidate, EvictionReason.AGE):
                continue
            remaining.append(candidate)

        # Step 2: count, oldest first
        excess = len(remaining) - config.max_artifacts
        if excess > 0:
            for candidate in sorted(remaining, key=lambda c: c.mtime):
                if excess <= 0:
                    break
                if candidate.name in skipped or any(
                    e.startswith(f"{candidate.name}:") for e in errors
                ):
                    continue
                if evict(candidate, EvictionReason.COUNT):
                    remaining.remove(candidate)
                    excess -= 1

        report = RetentionReport(
            decisions=decisions,
            skipped=skipped,
            errors=errors,
            remaining=len(remaining),
            dry_run=config.dry_run,
        )
        logger.info(
            "Retention pass complete: %d evicted, %d remaining, %d error(s)",
            len(decisions),
            report.remaining,
            len(errors),
        )
        return report
