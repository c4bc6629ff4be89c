"""Error taxonomy for the artifact lifecycle.

VCS problems are absent here: they degrade to sentinel values at the
resolver boundary and never surface as exceptions.
"""

from __future__ import annotations

from pathlib import Path


class ArtifactError(RuntimeError):
    """Base class for every error raised by this package."""


class PackagingError(ArtifactError):
    """Raised when a component archive cannot be produced."""


class BuildOutputMissingError(PackagingError):
    """Raised when a component's primary build-output directory is absent.

    The message names the expected relative path and is meant to be shown
    to the user verbatim.
    """

    def __init__(self, component: str, relative_path: str, absolute_path: Path) -> None:
        self.component = component
        self.relative_path = relative_path
        self.absolute_path = absolute_path
        super().__init__(
            f"{component.capitalize()} build directory '{relative_path}' not found"
        )


class ArtifactNotFoundError(ArtifactError):
    """Raised when a named artifact does not exist in the store."""


class ArtifactLockedError(ArtifactError):
    """Raised when an artifact directory is already held by another packager."""
