"""Read-side results: verification outcomes and catalog entries."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict

from farmtally_artifacts.models.identity import UNKNOWN


class VerificationResult(BaseModel):
    """Accumulated integrity errors for one artifact.

    The artifact is valid iff no error was recorded for any component.
    """

    model_config = ConfigDict(frozen=True)

    artifact_name: str
    errors: list[str] = []

    @property
    def is_valid(self) -> bool:
        return not self.errors


class ArtifactSummary(BaseModel):
    """One catalog row, taken from an artifact's ``manifest.json``."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    timestamp: str
    commit: str = UNKNOWN

    @property
    def built_at(self) -> datetime:
        """Parsed manifest timestamp, used for newest-first ordering."""
        parsed = datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
