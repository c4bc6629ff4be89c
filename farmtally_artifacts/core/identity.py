"""BuildIdentity resolver.

Combines the CI build number, VCS facts and the wall clock into a
``BuildIdentity``. Never raises: a missing build number falls back to Unix
seconds and VCS failures fall back to ``"unknown"``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from farmtally_artifacts.core.vcs import GitVcs, VcsInfo
from farmtally_artifacts.models.identity import BuildIdentity, shorten_commit

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format *moment* as second-precision UTC ``YYYY-MM-DDTHH:MM:SSZ``."""
    return moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


class BuildIdentityResolver:
    """Resolves the identity of the current build.

    Parameters
    ----------
    vcs:
        Source of commit and branch. Defaults to ``GitVcs()``.
    build_number:
        Explicit build number (normally ``BUILD_NUMBER``); blank counts as absent.
    clock:
        Returns the current time; injectable for tests.
    """

    def __init__(
        self,
        vcs: VcsInfo | None = None,
        build_number: str | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._vcs = vcs or GitVcs()
        self._build_number = (build_number or "").strip() or None
        self._clock = clock

    def resolve(self) -> BuildIdentity:
        now = self._clock()
        build_number = self._build_number or str(int(now.timestamp()))
        commit_sha = self._vcs.commit_sha()
        identity = BuildIdentity(
            commit_sha=commit_sha,
            commit_short=shorten_commit(commit_sha),
            branch_name=self._vcs.branch_name(),
            build_number=build_number,
            build_timestamp=format_timestamp(now),
        )
        logger.info(
            "Resolved build identity %s (branch=%s)",
            identity.artifact_name,
            identity.branch_name,
        )
        return identity
