"""Build-environment facts for the manifest, and readiness checks.

Everything here is best effort: a missing tool yields ``"unknown"`` in the
manifest and a failed check in ``validate``, never an exception.
"""

from __future__ import annotations

import getpass
import logging
import os
import platform
import shutil
import socket
import tempfile
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from farmtally_artifacts.core.packager import ComponentSpec
from farmtally_artifacts.core.vcs import run_command
from farmtally_artifacts.models.identity import UNKNOWN

logger = logging.getLogger(__name__)


class BuildEnvironment(BaseModel):
    """Environment metadata recorded in ``manifest.json``."""

    model_config = ConfigDict(frozen=True)

    environment: str = "production"
    node: str = UNKNOWN
    npm: str = UNKNOWN
    creator: str = UNKNOWN
    platform: str = UNKNOWN


def tool_version(tool: str) -> str:
    """Return ``<tool> --version`` output, or ``"unknown"``."""
    result = run_command([tool, "--version"])
    if result is None or result.returncode != 0:
        return UNKNOWN
    return result.stdout.strip().splitlines()[0] if result.stdout.strip() else UNKNOWN


def creator_tag() -> str:
    """``<user>@<hostname>`` of the process producing the artifact."""
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = os.environ.get("USER", UNKNOWN)
    return f"{user}@{socket.gethostname()}"


def platform_tag() -> str:
    """Lowercase ``<system>-<machine>``, e.g. ``linux-x86_64``."""
    system = platform.system().lower() or UNKNOWN
    machine = platform.machine().lower() or UNKNOWN
    return f"{system}-{machine}"


def capture_environment(environment: str = "production") -> BuildEnvironment:
    """Snapshot toolchain versions and host identity for one build."""
    return BuildEnvironment(
        environment=environment,
        node=tool_version("node"),
        npm=tool_version("npm"),
        creator=creator_tag(),
        platform=platform_tag(),
    )


# ---------------------------------------------------------------------------
# Readiness checks (``validate`` command)
# ---------------------------------------------------------------------------


class ReadinessCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    passed: bool
    detail: str = ""
    required: bool = True


def _check_tool(name: str, required: bool) -> ReadinessCheck:
    found = shutil.which(name)
    return ReadinessCheck(
        name=f"tool:{name}",
        passed=found is not None,
        detail=found or "not found on PATH",
        required=required,
    )


def _check_store_writable(store: Path) -> ReadinessCheck:
    try:
        store.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(dir=store, prefix=".probe-"):
            pass
    except OSError as exc:
        return ReadinessCheck(name="store:writable", passed=False, detail=str(exc))
    return ReadinessCheck(name="store:writable", passed=True, detail=str(store))


def _check_build_output(project_root: Path, spec: ComponentSpec) -> ReadinessCheck:
    relative = (spec.base_dir / spec.build_output).as_posix()
    present = (project_root / spec.base_dir / spec.build_output).is_dir()
    return ReadinessCheck(
        name=f"build:{spec.name}",
        passed=present,
        detail=relative if present else f"'{relative}' not found",
    )


def check_readiness(
    project_root: Path, store: Path, specs: list[ComponentSpec]
) -> list[ReadinessCheck]:
    """Check that a ``package`` run in *project_root* could succeed.

    Missing git/node/npm are reported but not required: the manifest falls
    back to ``"unknown"`` for them.
    """
    checks = [
        _check_tool("git", required=False),
        _check_tool("node", required=False),
        _check_tool("npm", required=False),
        _check_store_writable(Path(store)),
    ]
    checks.extend(_check_build_output(Path(project_root), spec) for spec in specs)
    for check in checks:
        if not check.passed:
            logger.info("Readiness check %s failed: %s", check.name, check.detail)
    return checks
