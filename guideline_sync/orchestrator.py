"""
Sync Orchestrator — The "refresh shared guidelines" workflow.

Runs the mirror sync, then the standalone artifact copy. The two are
independent: a mirror that can't reach upstream never stops the artifact
copy, and neither a connectivity problem nor a missing optional source
fails the run. Only a destination that can't be written does.

## Usage

    from guideline_sync.orchestrator import ArtifactTarget, SyncOrchestrator

    orchestrator = SyncOrchestrator(sink=ClickSink())
    result = orchestrator.refresh(repo, ArtifactTarget(source, dest_dir))
    raise SystemExit(0 if result.ok else 1)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .artifacts.file_sync import ArtifactCopyResult, DigestFileSynchronizer, DigestFunction
from .mirror.runner import CommandRunner
from .mirror.syncer import MirrorRepository, MirrorSyncer, SyncOutcome, SyncOutcomeKind
from .sink import LogSink, NullSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtifactTarget:
    """A single file to keep copied into a directory."""

    source: Path
    destination_dir: Path


@dataclass(frozen=True)
class RefreshResult:
    mirror: SyncOutcome
    artifact: Optional[ArtifactCopyResult] = None

    @property
    def ok(self) -> bool:
        """Only an unwritable destination counts as failure."""
        return self.artifact != ArtifactCopyResult.DESTINATION_UNWRITABLE

    @property
    def warnings(self) -> bool:
        return not self.mirror.ok


class SyncOrchestrator:
    """
    Compose the mirror syncer and the digest file synchronizer.

    Dependencies are injected so tests can swap the command runner or the
    digest function; by default both components share the orchestrator's
    sink.
    """

    def __init__(
        self,
        mirror_syncer: Optional[MirrorSyncer] = None,
        file_synchronizer: Optional[DigestFileSynchronizer] = None,
        sink: Optional[LogSink] = None,
        runner: Optional[CommandRunner] = None,
        digest: Optional[DigestFunction] = None,
    ):
        self.sink = sink or NullSink()
        self.mirror_syncer = mirror_syncer or MirrorSyncer(runner=runner, sink=self.sink)
        self.file_synchronizer = file_synchronizer or DigestFileSynchronizer(digest=digest, sink=self.sink)

    def refresh(
        self,
        repo: MirrorRepository,
        extra_artifact: Optional[ArtifactTarget] = None,
    ) -> RefreshResult:
        outcome = self.mirror_syncer.sync(repo)

        if outcome.ok:
            self.sink.write(f"Guidelines synced to {repo.local_path}/.")
        elif outcome.kind == SyncOutcomeKind.SKIPPED:
            self.sink.write("Warning: Skipped guidelines sync.")
        else:
            self.sink.write("Warning: Could not sync guidelines (repo not accessible).")
            if outcome.reason:
                self.sink.write(f"  {outcome.reason}")

        artifact_result = None
        if extra_artifact is not None:
            artifact_result = self.file_synchronizer.sync(
                extra_artifact.source, extra_artifact.destination_dir
            )

        result = RefreshResult(mirror=outcome, artifact=artifact_result)
        logger.info(
            f"Refresh finished: mirror={outcome.kind.value}, "
            f"artifact={artifact_result.value if artifact_result else 'none'}, ok={result.ok}"
        )
        return result
