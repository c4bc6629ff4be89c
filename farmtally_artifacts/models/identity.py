"""Build identity model — the name every artifact is stored under."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

UNKNOWN = "unknown"
ARTIFACT_PREFIX = "farmtally-"
SHORT_COMMIT_LENGTH = 8


def shorten_commit(commit_sha: str) -> str:
    """Return the 8-character short form of *commit_sha*.

    The ``"unknown"`` sentinel is returned unchanged rather than truncated.
    """
    if commit_sha == UNKNOWN:
        return UNKNOWN
    return commit_sha[:SHORT_COMMIT_LENGTH]


class BuildIdentity(BaseModel):
    """Canonical identity of one build, computed once per invocation.

    ``artifact_version`` and ``artifact_name`` are derived by plain string
    concatenation so they can be recomputed anywhere from the four inputs.
    """

    model_config = ConfigDict(frozen=True)

    commit_sha: str = UNKNOWN
    commit_short: str = UNKNOWN
    branch_name: str = UNKNOWN
    build_number: str
    build_timestamp: str  # YYYY-MM-DDTHH:MM:SSZ

    @property
    def artifact_version(self) -> str:
        return f"v{self.build_number}-{self.commit_short}"

    @property
    def artifact_name(self) -> str:
        return f"{ARTIFACT_PREFIX}{self.artifact_version}"
