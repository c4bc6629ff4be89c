"""Tests for ArtifactVerifier — accumulated integrity errors."""

from __future__ import annotations

from pathlib import Path

import pytest

from farmtally_artifacts.core import verifier as verifier_module
from farmtally_artifacts.core.errors import ArtifactNotFoundError
from farmtally_artifacts.core.pipeline import ArtifactPipeline
from farmtally_artifacts.core.verifier import ArtifactVerifier


@pytest.fixture
def packaged(pipeline: ArtifactPipeline, built_project: Path) -> Path:
    """A fully packaged artifact; returns its root directory."""
    return pipeline.run().artifact_root


class TestArtifactVerifier:
    def test_intact_artifact_is_valid(self, packaged: Path, store_path: Path):
        result = ArtifactVerifier(store_path).verify(packaged.name)
        assert result.is_valid is True
        assert result.errors == []

    def test_corrupted_archive(self, packaged: Path, store_path: Path):
        (packaged / "backend" / "backend.tar.gz").write_bytes(b"corrupted data")
        result = ArtifactVerifier(store_path).verify(packaged.name)
        assert result.is_valid is False
        assert result.errors == ["Backend integrity check failed"]

    def test_missing_checksum_file(self, packaged: Path, store_path: Path):
        (packaged / "backend" / "backend.sha256").unlink()
        result = ArtifactVerifier(store_path).verify(packaged.name)
        assert result.is_valid is False
        assert "Backend checksum file missing" in result.errors

    def test_missing_archive(self, packaged: Path, store_path: Path):
        (packaged / "frontend" / "frontend.tar.gz").unlink()
        result = ArtifactVerifier(store_path).verify(packaged.name)
        assert result.errors == ["Frontend archive missing"]

    def test_errors_accumulate_across_components(self, packaged: Path, store_path: Path):
        (packaged / "backend" / "backend.sha256").unlink()
        (packaged / "frontend" / "frontend.tar.gz").write_bytes(b"garbage")
        result = ArtifactVerifier(store_path).verify(packaged.name)
        assert result.errors == [
            "Backend checksum file missing",
            "Frontend integrity check failed",
        ]

    def test_uppercase_stored_checksum_still_matches(self, packaged: Path, store_path: Path):
        checksum_file = packaged / "backend" / "backend.sha256"
        checksum_file.write_text(checksum_file.read_text().upper() + "\n")
        assert ArtifactVerifier(store_path).verify(packaged.name).is_valid

    def test_non_utf8_checksum_file_is_reported(self, packaged: Path, store_path: Path):
        (packaged / "backend" / "backend.sha256").write_bytes(b"\xff\xfe\x00garbage")
        result = ArtifactVerifier(store_path).verify(packaged.name)
        assert result.errors == ["Backend checksum file unreadable"]

    def test_unreadable_archive_is_reported(
        self, packaged: Path, store_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        def denied(path):
            raise PermissionError(f"Permission denied: {path}")

        monkeypatch.setattr(verifier_module, "sha256_file", denied)
        result = ArtifactVerifier(store_path).verify(packaged.name)
        assert result.errors == [
            "Backend integrity check failed",
            "Frontend integrity check failed",
        ]

    def test_verification_does_not_mutate(self, packaged: Path, store_path: Path):
        archive = packaged / "backend" / "backend.tar.gz"
        archive.write_bytes(b"corrupted data")
        ArtifactVerifier(store_path).verify(packaged.name)
        assert archive.read_bytes() == b"corrupted data"
        assert (packaged / "backend" / "backend.sha256").exists()

    def test_metadata_dir_is_not_a_component(self, packaged: Path, store_path: Path):
        assert (packaged / "metadata").is_dir()
        assert ArtifactVerifier(store_path).verify(packaged.name).errors == []

    def test_unknown_artifact(self, store_path: Path):
        with pytest.raises(ArtifactNotFoundError, match="farmtally-v0-missing0"):
            ArtifactVerifier(store_path).verify("farmtally-v0-missing0")
