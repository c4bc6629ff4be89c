"""SHA-256 helpers for archive checksums.

Checksums are always taken over the compressed archive bytes as stored on
disk, never over the uncompressed contents.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

_CHUNK_SIZE = 1024 * 1024


def sha256_file(path: Path) -> str:
    """Return the lowercase SHA-256 hex digest of a file, read in chunks."""
    digest = hashlib.sha256()
    with Path(path).open("rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def read_checksum_file(path: Path) -> str:
    """Read a bare checksum file, normalised to trimmed lowercase hex."""
    return Path(path).read_text(encoding="utf-8").strip().lower()


def write_checksum_file(path: Path, checksum: str) -> None:
    """Write *checksum* as bare lowercase hex with no filename or newline."""
    Path(path).write_text(checksum.lower(), encoding="utf-8")


def checksums_match(expected: str, actual: str) -> bool:
    """Case-insensitive comparison of two hex digests."""
    return expected.strip().lower() == actual.strip().lower()
