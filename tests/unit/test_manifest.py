"""Tests for ManifestGenerator — schema, aliases, summary text."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from farmtally_artifacts.core.environment import BuildEnvironment
from farmtally_artifacts.core.manifest import ManifestGenerator
from farmtally_artifacts.core.vcs import StaticVcs
from farmtally_artifacts.models.identity import BuildIdentity
from farmtally_artifacts.models.manifest import ComponentDescriptor, Manifest


@pytest.fixture
def identity() -> BuildIdentity:
    return BuildIdentity(
        commit_sha="a1b2c3d4e5f6789012345678901234567890abcd",
        commit_short="a1b2c3d4",
        branch_name="main",
        build_number="123",
        build_timestamp="2024-05-17T09:30:12Z",
    )


@pytest.fixture
def components() -> list[ComponentDescriptor]:
    return [
        ComponentDescriptor(
            name="backend", type="backend", path="backend/backend.tar.gz", size=10, checksum="a" * 64
        ),
        ComponentDescriptor(
            name="frontend", type="frontend", path="frontend/frontend.tar.gz", size=20, checksum="b" * 64
        ),
    ]


@pytest.fixture
def environment() -> BuildEnvironment:
    return BuildEnvironment(
        environment="staging",
        node="v20.11.0",
        npm="10.2.4",
        creator="ci@build-host",
        platform="linux-x86_64",
    )


class TestManifestGenerator:
    def test_writes_manifest_json(self, tmp_path: Path, identity, components, environment):
        vcs = StaticVcs(remote="https://github.com/farmtally/farmtally.git", dirty=True)
        ManifestGenerator(vcs, retention_days=14).generate(tmp_path, components, identity, environment)

        data = json.loads((tmp_path / "manifest.json").read_text())
        assert data["version"] == "v123-a1b2c3d4"
        assert data["name"] == "farmtally-v123-a1b2c3d4"
        assert data["timestamp"] == "2024-05-17T09:30:12Z"
        assert data["git"] == {
            "commit": identity.commit_sha,
            "shortCommit": "a1b2c3d4",
            "branch": "main",
            "repository": "https://github.com/farmtally/farmtally.git",
            "dirty": True,
        }
        assert data["build"] == {
            "number": "123",
            "environment": "staging",
            "node": "v20.11.0",
            "npm": "10.2.4",
        }
        assert [c["name"] for c in data["components"]] == ["backend", "frontend"]
        assert data["components"][0]["size"] == 10
        assert data["metadata"] == {
            "creator": "ci@build-host",
            "platform": "linux-x86_64",
            "retentionDays": 14,
        }

    def test_manifest_round_trips_through_model(self, tmp_path: Path, identity, components, environment):
        written = ManifestGenerator(StaticVcs()).generate(tmp_path, components, identity, environment)
        parsed = Manifest.model_validate_json((tmp_path / "manifest.json").read_text())
        assert parsed == written

    def test_dirty_defaults_to_false_without_vcs(self, tmp_path: Path, identity, components, environment):
        manifest = ManifestGenerator(StaticVcs()).generate(tmp_path, components, identity, environment)
        assert manifest.git.dirty is False
        assert manifest.git.repository == "unknown"

    def test_artifact_info_summary(self, tmp_path: Path, identity, components, environment):
        ManifestGenerator(StaticVcs()).generate(tmp_path, components, identity, environment)
        summary = (tmp_path / "ARTIFACT_INFO.txt").read_text()
        assert "FarmTally Build Artifact" in summary
        assert "v123-a1b2c3d4" in summary
        assert "backend/backend.tar.gz" in summary
        assert "frontend/frontend.tar.gz" in summary

    def test_no_temp_files_left_behind(self, tmp_path: Path, identity, components, environment):
        ManifestGenerator(StaticVcs()).generate(tmp_path, components, identity, environment)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["ARTIFACT_INFO.txt", "manifest.json"]


class TestComponentDescriptor:
    def test_rejects_non_hex_checksum(self):
        with pytest.raises(ValueError):
            ComponentDescriptor(name="backend", type="backend", path="x", size=1, checksum="XYZ")
