"""
Front Matter — Minimal parser for ``---`` delimited key/value blocks.

The grammar is intentionally flat:

    ---
    name: "Example"
    description: Does a thing
    ---

Keys are lowercase ASCII letters. Values have surrounding whitespace and
one layer of matching quotes stripped. Lines that don't look like
``key: value`` are ignored.
"""

from __future__ import annotations

import re
from typing import Dict

DELIMITER = "---"

_BLOCK_RE = re.compile(
    r"\A---[ \t]*\n(?P<body>.*?)^---[ \t]*(?:\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
_LINE_RE = re.compile(r"^(?P<key>[a-z]+):\s*(?P<value>.*)$")

QUOTES = ("'", '"')


class FrontMatterError(ValueError):
    """The document does not open with a well-formed front-matter block."""


def strip_quotes(value: str) -> str:
    """Trim whitespace, then one layer of matching quotes."""
    value = value.strip()
    if len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]:
        value = value[1:-1]
    return value


def extract_block(text: str) -> str:
    """Return the raw body between the opening and closing delimiters."""
    text = text.replace("\r\n", "\n")
    match = _BLOCK_RE.match(text)
    if not match:
        raise FrontMatterError(
            "Missing or invalid front matter (must start with --- and end with ---)"
        )
    return match.group("body")


def parse_front_matter(text: str) -> Dict[str, str]:
    """
    Parse the front-matter block at the start of ``text``.

    Returns keys in document order; a repeated key keeps its last value.

    Raises:
        FrontMatterError: If the block is absent or unterminated
    """
    fields: Dict[str, str] = {}
    for line in extract_block(text).split("\n"):
        match = _LINE_RE.match(line.strip())
        if match:
            fields[match.group("key")] = strip_quotes(match.group("value"))
    return fields
