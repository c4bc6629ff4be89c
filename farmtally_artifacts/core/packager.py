"""Component packager — one tar.gz and one checksum file per component.

For a component named ``backend`` inside artifact root ``R``::

    R/backend/backend.tar.gz    # build output + fixed include set
    R/backend/backend.sha256    # bare lowercase hex of the archive bytes

Components are independent: each writes only below its own subdirectory,
so several may be packaged concurrently.
"""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from farmtally_artifacts.core.errors import BuildOutputMissingError, PackagingError
from farmtally_artifacts.core.hasher import sha256_file, write_checksum_file
from farmtally_artifacts.models.manifest import ComponentDescriptor

logger = logging.getLogger(__name__)


class ComponentSpec(BaseModel):
    """What goes into one component archive.

    Parameters
    ----------
    name:
        Component name; also the subdirectory and archive basename.
    base_dir:
        Directory (relative to the project root) that archive entries are
        taken from and made relative to.
    build_output:
        Required build-output directory, relative to ``base_dir``.
    includes:
        Additional files/directories, relative to ``base_dir``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    base_dir: Path = Path(".")
    build_output: str
    includes: tuple[str, ...] = ()

    @property
    def type(self) -> str:
        return self.name

    @property
    def entries(self) -> tuple[str, ...]:
        return (self.build_output, *self.includes)

    def archive_relpath(self) -> str:
        return f"{self.name}/{self.name}.tar.gz"

    def checksum_relpath(self) -> str:
        return f"{self.name}/{self.name}.sha256"


def backend_spec() -> ComponentSpec:
    return ComponentSpec(
        name="backend",
        build_output="dist",
        includes=("package.json", "package-lock.json", "prisma"),
    )


def frontend_spec(
    frontend_dir: Path = Path("farmtally-frontend"),
    config_file: str = "next.config.ts",
) -> ComponentSpec:
    return ComponentSpec(
        name="frontend",
        base_dir=Path(frontend_dir),
        build_output=".next",
        includes=("public", "package.json", "package-lock.json", config_file),
    )


class ComponentPackager:
    """Archives build outputs into an artifact directory.

    Parameters
    ----------
    project_root:
        Directory the component ``base_dir`` values are relative to.
    frontend_dir:
        Frontend project directory, relative to ``project_root``.
    """

    def __init__(
        self,
        project_root: Path = Path("."),
        frontend_dir: Path = Path("farmtally-frontend"),
    ) -> None:
        self._root = Path(project_root)
        self._frontend_dir = Path(frontend_dir)

    def specs(self) -> list[ComponentSpec]:
        """The components of a full build, in manifest order."""
        return [backend_spec(), frontend_spec(self._frontend_dir)]

    def package_backend(self, artifact_root: Path) -> ComponentDescriptor:
        return self.package(backend_spec(), artifact_root)

    def package_frontend(self, artifact_root: Path) -> ComponentDescriptor:
        return self.package(frontend_spec(self._frontend_dir), artifact_root)

    def package(self, spec: ComponentSpec, artifact_root: Path) -> ComponentDescriptor:
        """Archive *spec* into *artifact_root* and return its descriptor.

        Raises ``BuildOutputMissingError`` if the build output is absent and
        ``PackagingError`` for any other missing input or archive failure.
        No archive is left behind when packaging fails.
        """
        base = self._root / spec.base_dir
        output_dir = base / spec.build_output
        if not output_dir.is_dir():
            raise BuildOutputMissingError(
                spec.name,
                (spec.base_dir / spec.build_output).as_posix(),
                output_dir,
            )

        for entry in spec.includes:
            if not (base / entry).exists():
                raise PackagingError(
                    f"{spec.name.capitalize()} package input "
                    f"'{(spec.base_dir / entry).as_posix()}' not found"
                )

        artifact_root = Path(artifact_root)
        archive = artifact_root / spec.archive_relpath()
        partial = archive.with_name(archive.name + ".partial")
        archive.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Packaging %s from %s", spec.name, base)
        try:
            with tarfile.open(partial, "w:gz") as tar:
                for entry in spec.entries:
                    tar.add(base / entry, arcname=entry)
            partial.replace(archive)
        except (OSError, tarfile.TarError) as exc:
            partial.unlink(missing_ok=True)
            raise PackagingError(f"Failed to archive {spec.name}: {exc}") from exc

        try:
            checksum = sha256_file(archive)
            write_checksum_file(artifact_root / spec.checksum_relpath(), checksum)
            size = archive.stat().st_size
        except OSError as exc:
            archive.unlink(missing_ok=True)
            raise PackagingError(f"Failed to checksum {spec.name}: {exc}") from exc

        logger.info("Packaged %s: %d bytes, sha256=%s", spec.name, size, checksum)
        return ComponentDescriptor(
            name=spec.name,
            type=spec.type,
            path=spec.archive_relpath(),
            size=size,
            checksum=checksum,
        )
