"""Read-only VCS facts for build provenance.

Defines the ``VcsInfo`` protocol the resolver and manifest generator depend
on, a subprocess-backed ``GitVcs`` and a fixed-value ``StaticVcs``.

Every query degrades instead of raising: commit, branch and remote fall back
to ``"unknown"``; the dirty flag falls back to ``False``. Consumers of
``manifest.json`` should read ``"unknown"`` / ``dirty=false`` as "possibly
not a git checkout" rather than "verified clean".
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from farmtally_artifacts.models.identity import UNKNOWN

logger = logging.getLogger(__name__)


@runtime_checkable
class VcsInfo(Protocol):
    """The four VCS facts this package ever needs."""

    def commit_sha(self) -> str:
        """Full commit hash, or ``"unknown"``."""
        ...

    def branch_name(self) -> str:
        """Current branch name, or ``"unknown"``."""
        ...

    def remote_url(self) -> str:
        """Origin remote URL, or ``"unknown"``."""
        ...

    def is_dirty(self) -> bool:
        """True iff the working tree is known to have uncommitted changes."""
        ...


def run_command(args: list[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str] | None:
    """Run a local command, returning ``None`` if it cannot be started."""
    try:
        return subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.debug("Could not run %s: %s", args[0], exc)
        return None


class GitVcs:
    """``VcsInfo`` backed by the ``git`` executable.

    Parameters
    ----------
    repo_path:
        Working directory for git invocations. Defaults to the process cwd.
    """

    def __init__(self, repo_path: Path | None = None, git: str = "git") -> None:
        self._repo = repo_path
        self._git = git

    def _query(self, *args: str) -> str:
        result = run_command([self._git, *args], cwd=self._repo)
        if result is None or result.returncode != 0:
            logger.debug("git %s unavailable; using %r", " ".join(args), UNKNOWN)
            return UNKNOWN
        return result.stdout.strip() or UNKNOWN

    def commit_sha(self) -> str:
        sha = self._query("rev-parse", "HEAD")
        return sha.lower() if sha != UNKNOWN else sha

    def branch_name(self) -> str:
        return self._query("rev-parse", "--abbrev-ref", "HEAD")

    def remote_url(self) -> str:
        return self._query("config", "--get", "remote.origin.url")

    def is_dirty(self) -> bool:
        # diff-index exits 0 for clean, 1 for dirty; anything else is unverifiable.
        result = run_command(
            [self._git, "diff-index", "--quiet", "HEAD", "--"], cwd=self._repo
        )
        if result is not None and result.returncode in (0, 1):
            return result.returncode == 1
        logger.warning(
            "Working-tree cleanliness could not be verified; recording dirty=false."
        )
        return False


class StaticVcs:
    """``VcsInfo`` returning fixed values, for tests and non-git builds."""

    def __init__(
        self,
        commit: str = UNKNOWN,
        branch: str = UNKNOWN,
        remote: str = UNKNOWN,
        dirty: bool = False,
    ) -> None:
        self._commit = commit
        self._branch = branch
        self._remote = remote
        self._dirty = dirty

    def commit_sha(self) -> str:
        return self._commit

    def branch_name(self) -> str:
        return self._branch

    def remote_url(self) -> str:
        return self._remote

    def is_dirty(self) -> bool:
        return self._dirty
