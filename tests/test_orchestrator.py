"""
Tests for the refresh workflow: mirror sync followed by the artifact copy.
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest import mock

import pytest

from guideline_sync.artifacts.file_sync import ArtifactCopyResult, DigestFileSynchronizer
from guideline_sync.mirror.syncer import MirrorRepository, MirrorSyncer, SyncOutcomeKind
from guideline_sync.orchestrator import ArtifactTarget, RefreshResult, SyncOrchestrator
from tests.conftest import FakeRunner, failed, fake_git

URL = "https://example.com/org/guidelines.git"


@pytest.fixture
def repo(project_root: Path) -> MirrorRepository:
    return MirrorRepository(remote_url=URL, local_path=project_root / "guidelines")


@pytest.fixture
def artifact(tmp_path: Path, project_root: Path) -> ArtifactTarget:
    source = tmp_path / "package" / "refactor.md"
    source.parent.mkdir()
    source.write_text("# /refactor\n", encoding="utf-8")
    return ArtifactTarget(source=source, destination_dir=project_root / ".cursor" / "commands")


class TestRefresh:

    def test_clone_and_copy(self, repo, artifact, runner, sink):
        result = SyncOrchestrator(runner=runner, sink=sink).refresh(repo, artifact)

        assert result.ok
        assert not result.warnings
        assert result.mirror.kind == SyncOutcomeKind.CLONED
        assert result.artifact == ArtifactCopyResult.COPIED
        assert f"Guidelines synced to {repo.local_path}/." in sink
        assert (artifact.destination_dir / "refactor.md").exists()

    def test_without_artifact(self, repo, runner):
        result = SyncOrchestrator(runner=runner).refresh(repo)

        assert result.ok
        assert result.artifact is None

    def test_unreachable_still_copies_and_succeeds(self, repo, artifact, sink):
        """Connectivity failure → warning, artifact copy still runs, overall ok."""
        runner = FakeRunner({"clone": failed("fatal: Could not resolve host")})

        result = SyncOrchestrator(runner=runner, sink=sink).refresh(repo, artifact)

        assert result.ok
        assert result.warnings
        assert result.mirror.kind == SyncOutcomeKind.UNREACHABLE
        assert result.artifact == ArtifactCopyResult.COPIED
        assert "Warning: Could not sync guidelines (repo not accessible)." in sink

    def test_fetch_failure_on_existing_mirror_still_copies(self, repo, artifact):
        (repo.local_path / ".git").mkdir(parents=True)
        runner = FakeRunner({"fetch": failed()})

        result = SyncOrchestrator(runner=runner).refresh(repo, artifact)

        assert result.ok
        assert result.artifact == ArtifactCopyResult.COPIED
        assert "reset" not in runner.verbs

    @pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell script")
    def test_non_utf8_git_output_still_copies(self, repo, artifact, tmp_path, sink):
        """A failing git that prints invalid UTF-8 is a warning, not a crash."""
        script = fake_git(tmp_path, b"fatal: unable to access \xff\n", 128)
        orchestrator = SyncOrchestrator(mirror_syncer=MirrorSyncer(sink=sink, git=str(script)), sink=sink)

        result = orchestrator.refresh(repo, artifact)

        assert result.ok
        assert result.mirror.kind == SyncOutcomeKind.UNREACHABLE
        assert "�" in result.mirror.reason
        assert "  fatal: unable to access �" in sink.lines
        assert (artifact.destination_dir / "refactor.md").read_bytes() == artifact.source.read_bytes()

    def test_unreadable_destination_does_not_abort(self, repo, artifact, runner):
        artifact.destination_dir.mkdir(parents=True)
        (artifact.destination_dir / "refactor.md").write_text("locked", encoding="utf-8")
        source = artifact.source

        def digest(path):
            if path == source:
                return "source-digest"
            raise PermissionError("denied")

        result = SyncOrchestrator(runner=runner, digest=digest).refresh(repo, artifact)

        assert result.mirror.kind == SyncOutcomeKind.CLONED
        assert result.artifact == ArtifactCopyResult.DESTINATION_UNWRITABLE
        assert not result.ok

    def test_plain_directory_skips_mirror_but_copies(self, repo, artifact, runner, sink):
        repo.local_path.mkdir()
        (repo.local_path / "notes.md").write_text("mine", encoding="utf-8")

        result = SyncOrchestrator(runner=runner, sink=sink).refresh(repo, artifact)

        assert result.ok
        assert result.mirror.kind == SyncOutcomeKind.SKIPPED
        assert result.artifact == ArtifactCopyResult.COPIED
        assert "Warning: Skipped guidelines sync." in sink
        assert runner.calls == []

    def test_injected_digest_reaches_file_synchronizer(self, repo, artifact, runner):
        artifact.destination_dir.mkdir(parents=True)
        (artifact.destination_dir / "refactor.md").write_text("stale", encoding="utf-8")

        result = SyncOrchestrator(runner=runner, digest=lambda path: "fixed").refresh(repo, artifact)

        assert result.artifact == ArtifactCopyResult.ALREADY_UP_TO_DATE

    def test_missing_artifact_source_is_silent_skip(self, repo, project_root, runner):
        target = ArtifactTarget(project_root / "missing.md", project_root / ".cursor" / "commands")

        result = SyncOrchestrator(runner=runner).refresh(repo, target)

        assert result.ok
        assert result.artifact == ArtifactCopyResult.SOURCE_MISSING

    def test_unwritable_destination_fails(self, repo, artifact, runner):
        with mock.patch(
            "guideline_sync.artifacts.file_sync.shutil.copyfile",
            side_effect=OSError("disk full"),
        ):
            result = SyncOrchestrator(runner=runner).refresh(repo, artifact)

        assert not result.ok
        assert result.artifact == ArtifactCopyResult.DESTINATION_UNWRITABLE

    def test_second_refresh_is_idempotent(self, repo, artifact, runner):
        orchestrator = SyncOrchestrator(runner=runner)
        orchestrator.refresh(repo, artifact)

        result = orchestrator.refresh(repo, artifact)

        assert result.mirror.kind == SyncOutcomeKind.UPDATED
        assert result.artifact == ArtifactCopyResult.ALREADY_UP_TO_DATE

    def test_injected_components_are_used(self, repo, artifact):
        mirror = mock.Mock(spec=MirrorSyncer)
        mirror.sync.return_value = mock.Mock(ok=True, kind=SyncOutcomeKind.UPDATED, reason=None)
        files = mock.Mock(spec=DigestFileSynchronizer)
        files.sync.return_value = ArtifactCopyResult.ALREADY_UP_TO_DATE

        SyncOrchestrator(mirror_syncer=mirror, file_synchronizer=files).refresh(repo, artifact)

        mirror.sync.assert_called_once_with(repo)
        files.sync.assert_called_once_with(artifact.source, artifact.destination_dir)


class TestRefreshResult:

    @pytest.mark.parametrize("artifact,ok", [
        (None, True),
        (ArtifactCopyResult.COPIED, True),
        (ArtifactCopyResult.ALREADY_UP_TO_DATE, True),
        (ArtifactCopyResult.SOURCE_MISSING, True),
        (ArtifactCopyResult.DESTINATION_UNWRITABLE, False),
    ])
    def test_ok(self, artifact, ok):
        from guideline_sync.mirror.syncer import SyncOutcome

        assert RefreshResult(SyncOutcome.unreachable("offline"), artifact).ok is ok
