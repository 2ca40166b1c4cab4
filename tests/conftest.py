"""
Shared fixtures for sync, validator, and CLI tests.

Provides a temporary project root, a scripted command runner that stands
in for git (no network, no git binary), and a recording sink.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

from guideline_sync.mirror.runner import CommandResult
from guideline_sync.sink import ListSink


class FakeRunner:
    """
    Scripted CommandRunner.

    Results are keyed by git subcommand ("clone", "remote", "fetch",
    "reset"); anything unscripted succeeds with no output. A successful
    clone creates the target directory with a .git folder, like the real
    thing would.
    """

    def __init__(self, results: Optional[Dict[str, CommandResult]] = None):
        self.results = results or {}
        self.calls: List[List[str]] = []

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        args = [str(a) for a in args]
        self.calls.append(args)
        verb = self.subcommand(args)
        result = self.results.get(verb, CommandResult(output="", exit_status=0))

        if verb == "clone" and result.ok:
            (Path(args[-1]) / ".git").mkdir(parents=True, exist_ok=True)

        return result

    @staticmethod
    def subcommand(args: Sequence[str]) -> str:
        rest = list(args[1:])
        if rest[:1] == ["-C"]:
            rest = rest[2:]
        return rest[0] if rest else ""

    @property
    def verbs(self) -> List[str]:
        return [self.subcommand(c) for c in self.calls]


def failed(output: str = "fatal: unable to access remote", status: int = 128) -> CommandResult:
    return CommandResult(output=output, exit_status=status)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project root."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def sink() -> ListSink:
    return ListSink()


def write_skill(skills_dir: Path, name: str, front_matter: Optional[str] = None) -> Path:
    """Create skills_dir/name/SKILL.md. ``front_matter`` None → no file."""
    skill_dir = skills_dir / name
    skill_dir.mkdir(parents=True, exist_ok=True)
    if front_matter is not None:
        (skill_dir / "SKILL.md").write_text(front_matter, encoding="utf-8")
    return skill_dir


def valid_skill(name: str) -> str:
    return f"---\nname: {name}\ndescription: Guidance for {name}\n---\n\n# {name}\n"


def fake_git(directory: Path, output: bytes, exit_status: int) -> Path:
    """Write an executable that prints raw ``output`` bytes and exits."""
    payload = directory / "git-output.bin"
    payload.write_bytes(output)
    script = directory / "fake-git"
    script.write_text(f"#!/bin/sh\ncat '{payload}'\nexit {exit_status}\n", encoding="utf-8")
    script.chmod(0o755)
    return script
