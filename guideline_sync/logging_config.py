"""
Logging Configuration — one stderr handler for the CLI.

Sink lines are the user-facing output; this log stream carries the
diagnostics behind them (git commands run, digests compared, outcomes).

## Environment Variables

- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
- LOG_FORMAT: json, text (default: text)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone

# Extra fields the sync components attach to their outcome records
RECORD_EXTRAS = ("repo", "outcome")


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for CI logs."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in RECORD_EXTRAS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


class HumanFormatter(logging.Formatter):
    """``LEVEL   [module] message``, with the outcome appended when present."""

    def format(self, record: logging.LogRecord) -> str:
        module = record.name.rsplit(".", 1)[-1]
        line = f"{record.levelname:7} [{module}] {record.getMessage()}"
        if hasattr(record, "outcome"):
            line += f" ({record.outcome})"
        return line


def setup_logging(level: str | None = None, format_type: str | None = None) -> None:
    """
    Configure the root logger. Arguments win over LOG_LEVEL / LOG_FORMAT.
    """
    log_level = (level or os.environ.get("LOG_LEVEL", "WARNING")).upper()
    log_format = (format_type or os.environ.get("LOG_FORMAT", "text")).lower()
    numeric_level = getattr(logging, log_level, logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if log_format == "json" else HumanFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)
