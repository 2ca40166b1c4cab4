"""
Mirror Syncer — Clone or update a read-only mirror of a remote repository.

Two fixed operations, nothing else:

- No repository at the local path: shallow, single-branch clone.
- Repository present: point ``origin`` at the configured URL, fetch the
  branch, hard-reset the working tree to ``FETCH_HEAD``.

Network failure is an expected condition. It comes back as an
``UNREACHABLE`` outcome, never as an exception, and is never retried here.

## Usage

    from guideline_sync.mirror.syncer import MirrorRepository, MirrorSyncer

    repo = MirrorRepository(
        remote_url="https://github.com/codebar-ag/coding-guidelines.git",
        local_path=Path("guidelines"),
    )
    outcome = MirrorSyncer().sync(repo)
    if not outcome.ok:
        print(f"Warning: {outcome.reason}")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from ..sink import PREFIX, LogSink, NullSink
from .runner import CommandResult, CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)


class LocalState(str, Enum):
    """What currently sits at a mirror's local path."""
    ABSENT = "absent"           # nothing there, or an empty directory
    REPOSITORY = "repository"   # has .git metadata
    PLAIN = "plain"             # non-empty directory without .git, or a file


class SyncOutcomeKind(str, Enum):
    CLONED = "cloned"
    UPDATED = "updated"
    UNREACHABLE = "unreachable"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class MirrorRepository:
    """A remote repository and the directory that mirrors it."""

    remote_url: str
    local_path: Path
    default_branch: str = "main"

    def local_state(self) -> LocalState:
        path = Path(self.local_path)
        try:
            if (path / ".git").exists():
                return LocalState.REPOSITORY
            if not path.exists():
                return LocalState.ABSENT
            if path.is_dir() and not any(path.iterdir()):
                return LocalState.ABSENT
        except OSError as e:
            # Unreadable: never clone over it
            logger.debug(f"Cannot inspect {path}: {e}")
        return LocalState.PLAIN


@dataclass(frozen=True)
class SyncOutcome:
    """Result of one mirror sync. ``reason`` is set for the failure kinds."""

    kind: SyncOutcomeKind
    reason: Optional[str] = None

    @classmethod
    def cloned(cls) -> "SyncOutcome":
        return cls(SyncOutcomeKind.CLONED)

    @classmethod
    def updated(cls) -> "SyncOutcome":
        return cls(SyncOutcomeKind.UPDATED)

    @classmethod
    def unreachable(cls, reason: str) -> "SyncOutcome":
        return cls(SyncOutcomeKind.UNREACHABLE, reason)

    @classmethod
    def skipped(cls, reason: str) -> "SyncOutcome":
        return cls(SyncOutcomeKind.SKIPPED, reason)

    @property
    def ok(self) -> bool:
        """True when the mirror now matches upstream."""
        return self.kind in (SyncOutcomeKind.CLONED, SyncOutcomeKind.UPDATED)

    def __str__(self) -> str:
        if self.reason:
            return f"{self.kind.value}: {self.reason}"
        return self.kind.value


def _describe_failure(step: str, result: CommandResult) -> str:
    """One-line reason built from exit status and the last output line."""
    lines = result.lines()
    detail = lines[-1] if lines else "no output"
    return f"{step} failed (exit {result.exit_status}): {detail}"


class MirrorSyncer:
    """
    Clone-or-update a mirror through an injectable command runner.

    All process output is handed to the sink line by line; nothing the
    tool prints is discarded.
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        sink: Optional[LogSink] = None,
        git: str = "git",
    ):
        self.runner = runner or SubprocessRunner()
        self.sink = sink or NullSink()
        self.git = git

    def sync(self, repo: MirrorRepository) -> SyncOutcome:
        """Bring ``repo.local_path`` up to date with ``repo.remote_url``."""
        state = repo.local_state()
        logger.debug(f"Mirror {repo.local_path} is {state.value}")

        if state == LocalState.REPOSITORY:
            outcome = self._update(repo)
        elif state == LocalState.ABSENT:
            outcome = self._clone(repo)
        else:
            outcome = SyncOutcome.skipped(
                f"{repo.local_path} exists and is not a git repository"
            )
            self.sink.write(f"{PREFIX} {outcome.reason}, leaving it untouched.")

        log = logger.info if outcome.ok else logger.warning
        log(
            f"Mirror sync {outcome}",
            extra={"repo": repo.remote_url, "outcome": outcome.kind.value},
        )
        return outcome

    # ─── Operations ─────────────────────────────────────────

    def _clone(self, repo: MirrorRepository) -> SyncOutcome:
        result = self._run([
            self.git, "clone",
            "--depth", "1",
            "--quiet",
            "--single-branch",
            "--branch", repo.default_branch,
            repo.remote_url,
            str(repo.local_path),
        ])
        if not result.ok:
            return SyncOutcome.unreachable(_describe_failure("clone", result))
        return SyncOutcome.cloned()

    def _update(self, repo: MirrorRepository) -> SyncOutcome:
        path = str(repo.local_path)

        # Keep a renamed or forked upstream working without manual fixup
        result = self._run([self.git, "-C", path, "remote", "set-url", "origin", repo.remote_url])
        if not result.ok:
            self.sink.write(f"{PREFIX} Could not rewrite origin URL (exit {result.exit_status}).")

        result = self._run([self.git, "-C", path, "fetch", "origin", repo.default_branch, "--quiet"])
        if not result.ok:
            return SyncOutcome.unreachable(_describe_failure("fetch", result))

        # Local edits are discarded; the directory mirrors upstream
        result = self._run([self.git, "-C", path, "reset", "--hard", "FETCH_HEAD"])
        if not result.ok:
            return SyncOutcome.unreachable(_describe_failure("reset", result))

        return SyncOutcome.updated()

    def _run(self, args: Sequence[str]) -> CommandResult:
        result = self.runner.run(args)
        for line in result.lines():
            self.sink.write(f"  {line}")
        return result
