"""FarmTally artifact data models — all Pydantic v2, all frozen (immutable)."""

from farmtally_artifacts.models.identity import (
    ARTIFACT_PREFIX,
    UNKNOWN,
    BuildIdentity,
    shorten_commit,
)
from farmtally_artifacts.models.manifest import (
    BuildInfo,
    ComponentDescriptor,
    GitInfo,
    Manifest,
    ManifestMetadata,
)
from farmtally_artifacts.models.reports import ArtifactSummary, VerificationResult
from farmtally_artifacts.models.retention import (
    DEFAULT_MAX_ARTIFACTS,
    DEFAULT_RETENTION_DAYS,
    EvictionDecision,
    EvictionReason,
    RetentionConfig,
    RetentionReport,
)

__all__ = [
    # identity
    "ARTIFACT_PREFIX",
    "UNKNOWN",
    "BuildIdentity",
    "shorten_commit",
    # manifest
    "BuildInfo",
    "ComponentDescriptor",
    "GitInfo",
    "Manifest",
    "ManifestMetadata",
    # reports
    "ArtifactSummary",
    "VerificationResult",
    # retention
    "DEFAULT_MAX_ARTIFACTS",
    "DEFAULT_RETENTION_DAYS",
    "EvictionDecision",
    "EvictionReason",
    "RetentionConfig",
    "RetentionReport",
]
