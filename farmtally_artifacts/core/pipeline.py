"""Packaging pipeline — resolve, allocate, package, then write the manifest.

Wires the resolver, directory manager, packager and manifest generator into
the single ``package`` operation. Components are packaged concurrently; the
manifest is written only after every component has succeeded, so a failed
run leaves an artifact directory without ``manifest.json`` (i.e. one that
the catalog and verifier treat as incomplete).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from farmtally_artifacts.config import ArtifactSettings
from farmtally_artifacts.core.environment import BuildEnvironment, capture_environment
from farmtally_artifacts.core.errors import PackagingError
from farmtally_artifacts.core.identity import BuildIdentityResolver
from farmtally_artifacts.core.layout import INFO_FILE, MANIFEST_FILE, ArtifactDirectoryManager
from farmtally_artifacts.core.manifest import ManifestGenerator
from farmtally_artifacts.core.packager import ComponentPackager, ComponentSpec
from farmtally_artifacts.core.vcs import GitVcs, VcsInfo
from farmtally_artifacts.models.identity import BuildIdentity
from farmtally_artifacts.models.manifest import ComponentDescriptor, Manifest

logger = logging.getLogger(__name__)


class PackageResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity: BuildIdentity
    artifact_root: Path
    manifest: Manifest


class ArtifactPipeline:
    """End-to-end ``package`` operation for one build.

    Parameters
    ----------
    settings:
        Paths, build inputs and retention defaults.
    vcs:
        VCS facts source; defaults to ``GitVcs`` rooted at the project root.
    environment_probe:
        Returns the ``BuildEnvironment`` for the manifest; injectable so tests
        need not shell out to node/npm.
    """

    def __init__(
        self,
        settings: ArtifactSettings,
        *,
        vcs: VcsInfo | None = None,
        environment_probe: Callable[[str], BuildEnvironment] = capture_environment,
    ) -> None:
        self.settings = settings
        self.vcs = vcs or GitVcs(settings.project_root)
        self.resolver = BuildIdentityResolver(self.vcs, build_number=settings.build_number)
        self.layout = ArtifactDirectoryManager(settings.store_path)
        self.packager = ComponentPackager(settings.project_root, settings.frontend_dir)
        self.generator = ManifestGenerator(self.vcs, retention_days=settings.retention_days)
        self._environment_probe = environment_probe

    def package_components(
        self, artifact_root: Path, specs: list[ComponentSpec] | None = None
    ) -> list[ComponentDescriptor]:
        """Package every component concurrently and join.

        Descriptors are returned in *specs* order regardless of completion
        order. If any component fails, the first failure in *specs* order is
        raised after all workers have finished.
        """
        specs = specs if specs is not None else self.packager.specs()
        workers = max(1, min(self.settings.max_workers, len(specs)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="packager") as pool:
            futures = [pool.submit(self.packager.package, spec, artifact_root) for spec in specs]
        failures = [f.exception() for f in futures if f.exception() is not None]
        if failures:
            raise failures[0]
        return [f.result() for f in futures]

    def run(self, identity: BuildIdentity | None = None) -> PackageResult:
        """Package the current build and write its manifest.

        Re-packaging an existing identity first withdraws its manifest, so
        the artifact reads as incomplete until every component is rebuilt.
        """
        identity = identity or self.resolver.resolve()
        try:
            artifact_root = self.layout.setup_artifact_directory(identity)
        except OSError as exc:
            raise PackagingError(
                f"Cannot create artifact directory under {self.layout.store_path}: {exc}"
            ) from exc

        with self.layout.packaging_lock(artifact_root):
            self._withdraw_manifest(artifact_root)
            descriptors = self.package_components(artifact_root)
            environment = self._environment_probe(self.settings.build_environment)
            manifest = self.generator.generate(
                artifact_root, descriptors, identity, environment
            )

        logger.info("Artifact %s complete at %s", identity.artifact_name, artifact_root)
        return PackageResult(
            identity=identity, artifact_root=artifact_root, manifest=manifest
        )

    @staticmethod
    def _withdraw_manifest(artifact_root: Path) -> None:
        manifest = artifact_root / MANIFEST_FILE
        if manifest.exists():
            logger.warning("Re-packaging %s; previous manifest withdrawn", artifact_root.name)
            manifest.unlink()
        (artifact_root / INFO_FILE).unlink(missing_ok=True)
