"""FarmTally build-artifact lifecycle manager.

Turns a completed build (backend + frontend outputs) into a versioned,
checksummed artifact directory, and later verifies, lists and prunes those
artifacts on a local or CI-mounted filesystem.
"""

__version__ = "0.1.0"
__description__ = "Versioned, checksummed build-artifact lifecycle manager"

from farmtally_artifacts.core.catalog import ArtifactCatalog
from farmtally_artifacts.core.pipeline import ArtifactPipeline
from farmtally_artifacts.core.retention import RetentionEnforcer
from farmtally_artifacts.core.verifier import ArtifactVerifier

__all__ = [
    "ArtifactCatalog",
    "ArtifactPipeline",
    "ArtifactVerifier",
    "RetentionEnforcer",
    "__version__",
]
