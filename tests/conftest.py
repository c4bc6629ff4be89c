"""Shared test fixtures for the FarmTally artifact manager."""

from __future__ import annotations

import json
import os
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from farmtally_artifacts.config import ArtifactSettings
from farmtally_artifacts.core.environment import BuildEnvironment
from farmtally_artifacts.core.pipeline import ArtifactPipeline
from farmtally_artifacts.core.vcs import StaticVcs

TEST_COMMIT = "a1b2c3d4e5f6789012345678901234567890abcd"
TEST_REMOTE = "https://github.com/farmtally/farmtally.git"


def write_backend_build(root: Path) -> None:
    """Lay out a minimal backend build: dist/, package files, prisma/."""
    (root / "dist").mkdir(parents=True, exist_ok=True)
    (root / "dist" / "server.js").write_text('console.log("backend server");')
    (root / "dist" / "config.js").write_text("module.exports = {};")
    (root / "package.json").write_text(
        json.dumps({"name": "farmtally-backend", "version": "1.0.0"}, indent=2)
    )
    (root / "package-lock.json").write_text("{}")
    (root / "prisma").mkdir(exist_ok=True)
    (root / "prisma" / "schema.prisma").write_text(
        'generator client { provider = "prisma-client-js" }'
    )


def write_frontend_build(root: Path, frontend_dir: str = "farmtally-frontend") -> None:
    """Lay out a minimal Next.js build under *frontend_dir*."""
    fe = root / frontend_dir
    (fe / ".next").mkdir(parents=True, exist_ok=True)
    (fe / "public").mkdir(exist_ok=True)
    (fe / ".next" / "BUILD_ID").write_text("test-build-id")
    (fe / "public" / "favicon.ico").write_text("fake-favicon")
    (fe / "package.json").write_text(
        json.dumps({"name": "farmtally-frontend", "version": "1.0.0"}, indent=2)
    )
    (fe / "package-lock.json").write_text("{}")
    (fe / "next.config.ts").write_text("export default {};")


def set_age(path: Path, days: float) -> None:
    """Backdate *path*'s mtime by *days*."""
    stamp = time.time() - days * 24 * 60 * 60
    os.utime(path, (stamp, stamp))


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """An empty project directory; tests add build outputs as needed."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "artifacts"


@pytest.fixture
def built_project(project_root: Path) -> Path:
    """A project with both backend and frontend build outputs present."""
    write_backend_build(project_root)
    write_frontend_build(project_root)
    return project_root


@pytest.fixture
def static_vcs() -> StaticVcs:
    return StaticVcs(commit=TEST_COMMIT, branch="main", remote=TEST_REMOTE, dirty=False)


@pytest.fixture
def settings(project_root: Path, store_path: Path) -> ArtifactSettings:
    return ArtifactSettings(
        project_root=project_root,
        store_path=store_path,
        build_number="123",
        build_environment="production",
    )


@pytest.fixture
def fake_environment() -> Callable[[str], BuildEnvironment]:
    """Environment probe that never shells out to node/npm."""

    def _probe(environment: str) -> BuildEnvironment:
        return BuildEnvironment(
            environment=environment,
            node="v20.11.0",
            npm="10.2.4",
            creator="ci@build-host",
            platform="linux-x86_64",
        )

    return _probe


@pytest.fixture
def pipeline(
    settings: ArtifactSettings,
    static_vcs: StaticVcs,
    fake_environment: Callable[[str], BuildEnvironment],
) -> ArtifactPipeline:
    return ArtifactPipeline(settings, vcs=static_vcs, environment_probe=fake_environment)


@pytest.fixture
def make_manifest_artifact(store_path: Path) -> Callable[..., Path]:
    """Factory fixture: write an artifact directory holding only a manifest."""

    def _factory(name: str, **fields: Any) -> Path:
        root = store_path / name
        root.mkdir(parents=True, exist_ok=True)
        manifest: dict[str, Any] = {
            "version": name.removeprefix("farmtally-"),
            "name": name,
            "timestamp": "2024-01-01T00:00:00Z",
            "git": {"commit": "test-commit", "shortCommit": "abc12345", "branch": "main"},
            "build": {"number": "100"},
            "components": [],
        }
        manifest.update(fields)
        (root / "manifest.json").write_text(json.dumps(manifest, indent=2))
        return root

    return _factory


@pytest.fixture
def make_backend_build() -> Callable[[Path], None]:
    """Factory fixture: lay out a backend build under a given root."""
    return write_backend_build


@pytest.fixture
def make_frontend_build() -> Callable[..., None]:
    """Factory fixture: lay out a frontend build under a given root."""
    return write_frontend_build


@pytest.fixture
def backdate() -> Callable[[Path, float], None]:
    """Factory fixture: backdate a path's mtime by a number of days."""
    return set_age
