"""
Command Runner — Run external processes and capture what they say.

The mirror syncer only talks to git through a ``CommandRunner`` so tests
can script process results without a network or a git binary.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

# Exit status reported when the executable cannot be started at all
EXIT_NOT_RUNNABLE = 127


@dataclass(frozen=True)
class CommandResult:
    """Combined stdout/stderr and exit status of one process."""

    output: str
    exit_status: int

    @property
    def ok(self) -> bool:
        return self.exit_status == 0

    def lines(self) -> List[str]:
        """Non-empty output lines, right-stripped."""
        return [line.rstrip() for line in self.output.splitlines() if line.strip()]


class CommandRunner(Protocol):
    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        ...


class SubprocessRunner:
    """
    Run commands with ``subprocess.run``.

    stderr is folded into stdout so callers see output in the order the
    tool produced it. Undecodable bytes become U+FFFD rather than raising.
    No timeout is applied; the tool's own defaults rule.
    """

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        cmd = [str(a) for a in args]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.warning(f"Could not start {cmd[0]}: {e}")
            return CommandResult(output=str(e), exit_status=EXIT_NOT_RUNNABLE)

        logger.debug(f"Exit {result.returncode}: {cmd[0]} {cmd[1] if len(cmd) > 1 else ''}")
        return CommandResult(output=result.stdout or "", exit_status=result.returncode)
