"""
Digest File Sync — Copy one artifact only when its content changed.

Source and destination are compared by SHA-256. Equal digests mean no
write at all, so running the sync repeatedly with an unchanged source is
a no-op on disk.

## Usage

    from guideline_sync.artifacts.file_sync import DigestFileSynchronizer

    result = DigestFileSynchronizer().sync(
        Path("guidelines/refactor.md"), Path(".cursor/commands")
    )
"""

from __future__ import annotations

import hashlib
import logging
import shutil
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from ..sink import PREFIX, LogSink, NullSink

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

DigestFunction = Callable[[Path], str]


class ArtifactCopyResult(str, Enum):
    """Outcome of a single-file sync."""
    ALREADY_UP_TO_DATE = "already_up_to_date"
    COPIED = "copied"
    SOURCE_MISSING = "source_missing"
    DESTINATION_UNWRITABLE = "destination_unwritable"

    @property
    def ok(self) -> bool:
        """True when the destination now matches the source."""
        return self in (ArtifactCopyResult.ALREADY_UP_TO_DATE, ArtifactCopyResult.COPIED)


def sha256_file(path: Path) -> str:
    """Hex SHA-256 of a file, read in chunks."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


class DigestFileSynchronizer:
    """Content-hash-gated copy of a single file into a directory."""

    def __init__(
        self,
        digest: Optional[DigestFunction] = None,
        sink: Optional[LogSink] = None,
    ):
        self.digest = digest or sha256_file
        self.sink = sink or NullSink()

    def sync(self, source: Path, destination_dir: Path) -> ArtifactCopyResult:
        """
        Copy ``source`` into ``destination_dir`` unless an identical copy
        is already there. The destination keeps the source's file name.
        """
        source = Path(source)
        destination_dir = Path(destination_dir)
        destination = destination_dir / source.name

        if not source.is_file():
            self.sink.write(f"{PREFIX} {source.name} not found, skipping sync.")
            logger.debug(f"Source missing: {source}")
            return ArtifactCopyResult.SOURCE_MISSING

        try:
            destination_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.sink.write(f"{PREFIX} Could not create {destination_dir} directory.")
            logger.warning(f"mkdir {destination_dir} failed: {e}")
            return ArtifactCopyResult.DESTINATION_UNWRITABLE

        # An unreadable source is treated like an absent one
        try:
            source_hash = self.digest(source)
        except OSError as e:
            self.sink.write(f"{PREFIX} {source.name} could not be read, skipping sync.")
            logger.warning(f"Reading {source} failed: {e}")
            return ArtifactCopyResult.SOURCE_MISSING

        try:
            destination_hash = self.digest(destination) if destination.is_file() else None
        except OSError as e:
            self.sink.write(f"{PREFIX} Could not read existing {destination}.")
            logger.warning(f"Reading {destination} failed: {e}")
            return ArtifactCopyResult.DESTINATION_UNWRITABLE

        logger.debug(f"{source.name}: source={source_hash[:12]} destination={(destination_hash or '-')[:12]}")

        if source_hash == destination_hash:
            self.sink.write(f"{PREFIX} {source.name} already up to date.")
            return ArtifactCopyResult.ALREADY_UP_TO_DATE

        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            self.sink.write(f"{PREFIX} Failed to copy {source.name}.")
            logger.warning(f"Copy {source} -> {destination} failed: {e}")
            return ArtifactCopyResult.DESTINATION_UNWRITABLE

        self.sink.write(f"{PREFIX} Synced {source.name} to {destination}")
        logger.info(f"Copied {source} -> {destination}")
        return ArtifactCopyResult.COPIED
