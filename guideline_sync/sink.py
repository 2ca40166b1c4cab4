"""
Log Sinks — Where user-facing progress lines go.

Sync components never print. They hand one-line, human-readable messages
to a ``LogSink``; the caller decides whether those land on the terminal,
in the logging system, in a list, or nowhere.

## Usage

    from guideline_sync.sink import ClickSink

    syncer = MirrorSyncer(sink=ClickSink())
"""

from __future__ import annotations

import logging
from typing import List, Protocol

import click

PREFIX = "[guidelines]"


class LogSink(Protocol):
    """Anything that accepts a message line."""

    def write(self, message: str) -> None:
        ...


class NullSink:
    """Discards every message. Default for all components."""

    def write(self, message: str) -> None:
        pass


class LoggingSink:
    """Forward messages to a ``logging.Logger``."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger("guideline_sync")
        self.level = level

    def write(self, message: str) -> None:
        self.logger.log(self.level, message)


class ClickSink:
    """Echo messages through click (stdout, or stderr when ``err=True``)."""

    def __init__(self, err: bool = False):
        self.err = err

    def write(self, message: str) -> None:
        click.echo(message, err=self.err)


class ListSink:
    """Collect messages in memory."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def write(self, message: str) -> None:
        self.lines.append(message)

    def __contains__(self, fragment: str) -> bool:
        return any(fragment in line for line in self.lines)
