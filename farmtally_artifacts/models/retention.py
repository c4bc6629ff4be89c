"""Retention policy input and the audit report it produces."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_RETENTION_DAYS = 30
DEFAULT_MAX_ARTIFACTS = 50


class RetentionConfig(BaseModel):
    """Policy passed to the Retention Enforcer at call time.

    Parameters
    ----------
    retention_days:
        Artifacts whose directory mtime is older than this are evicted first.
    max_artifacts:
        Upper bound on artifacts kept after age-based eviction.
    dry_run:
        Report decisions without deleting anything.
    lock_stale_after_seconds:
        A packaging lock older than this is treated as abandoned.
    """

    model_config = ConfigDict(frozen=True)

    retention_days: int = Field(default=DEFAULT_RETENTION_DAYS, ge=0)
    max_artifacts: int = Field(default=DEFAULT_MAX_ARTIFACTS, ge=0)
    dry_run: bool = False
    lock_stale_after_seconds: int = Field(default=3600, ge=0)


class EvictionReason(str, Enum):
    AGE = "age"
    COUNT = "count"


class EvictionDecision(BaseModel):
    """One artifact chosen for deletion and why."""

    model_config = ConfigDict(frozen=True)

    name: str
    reason: EvictionReason
    age_days: float


class RetentionReport(BaseModel):
    """Outcome of one retention pass over the store."""

    model_config = ConfigDict(frozen=True)

    decisions: list[EvictionDecision] = []
    skipped: list[str] = []
    errors: list[str] = []
    remaining: int = 0
    dry_run: bool = False

    @property
    def evicted(self) -> list[str]:
        return [d.name for d in self.decisions]
