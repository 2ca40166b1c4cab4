"""
Skill Validator — Check every skill manifest under a directory.

Each immediate subdirectory of the skills root is one skill and must
contain a metadata file (``SKILL.md``) whose front matter has non-empty
``name`` and ``description`` fields. The number of skills must match the
expected count.

Validation never stops at the first problem: every violation is collected
so a maintainer sees the whole list in one pass.

## Usage

    from guideline_sync.skills.validator import ManifestValidator

    report = ManifestValidator().validate(Path("resources/boost/skills"), 36)
    if not report.ok:
        for line in report.error_lines():
            print(f"ERROR: {line}")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .frontmatter import FrontMatterError, parse_front_matter

logger = logging.getLogger(__name__)

DEFAULT_METADATA_FILE = "SKILL.md"
REQUIRED_FIELDS = ("name", "description")


@dataclass
class SkillManifest:
    """One scanned skill directory and what was found wrong with it."""

    directory_name: str
    raw_front_matter: Dict[str, str] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ValidationIssue:
    """A single violation. ``manifest`` is None for run-wide problems."""

    manifest: Optional[str]
    message: str

    def __str__(self) -> str:
        if self.manifest is None:
            return self.message
        return f"{self.manifest}: {self.message}"


@dataclass(frozen=True)
class ValidationReport:
    """Immutable summary of one validation run."""

    manifests_checked: int
    expected_count: int
    errors: Tuple[ValidationIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def error_lines(self) -> List[str]:
        return [str(e) for e in self.errors]

    def errors_for(self, manifest: str) -> List[str]:
        return [e.message for e in self.errors if e.manifest == manifest]


class ManifestValidator:
    """Validate a directory of skill manifests."""

    def __init__(
        self,
        metadata_file: str = DEFAULT_METADATA_FILE,
        required_fields: Sequence[str] = REQUIRED_FIELDS,
    ):
        self.metadata_file = metadata_file
        self.required_fields = tuple(required_fields)

    def validate(self, manifests_root: Path, expected_count: int) -> ValidationReport:
        """
        Validate every skill under ``manifests_root``.

        Args:
            manifests_root: Directory holding one subdirectory per skill
            expected_count: How many skills there must be

        Returns:
            ValidationReport listing every violation found
        """
        root = Path(manifests_root)
        if not root.is_dir():
            logger.warning(f"Skills directory not found: {root}")
            return ValidationReport(
                manifests_checked=0,
                expected_count=expected_count,
                errors=(ValidationIssue(None, f"Skills directory not found: {root}"),),
            )

        directories = self.discover(root)
        issues: List[ValidationIssue] = []

        for directory in directories:
            manifest = self.check_manifest(directory)
            issues.extend(ValidationIssue(manifest.directory_name, e) for e in manifest.errors)

        if len(directories) != expected_count:
            issues.append(ValidationIssue(
                None,
                f"Expected {expected_count} skills, found {len(directories)}. "
                "Update README or add missing skills.",
            ))

        logger.info(f"Validated {len(directories)} skill(s): {len(issues)} error(s)")
        return ValidationReport(
            manifests_checked=len(directories),
            expected_count=expected_count,
            errors=tuple(issues),
        )

    def discover(self, root: Path) -> List[Path]:
        """Immediate, non-hidden subdirectories in name order."""
        return sorted(
            (p for p in root.iterdir() if p.is_dir() and not p.name.startswith(".")),
            key=lambda p: p.name,
        )

    def check_manifest(self, directory: Path) -> SkillManifest:
        """Scan one skill directory."""
        manifest = SkillManifest(directory_name=directory.name)
        metadata_path = directory / self.metadata_file

        if not metadata_path.is_file():
            manifest.errors.append(f"Missing {self.metadata_file}")
            return manifest

        try:
            content = metadata_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            manifest.errors.append(f"{self.metadata_file} is not valid UTF-8")
            return manifest
        except OSError as e:
            manifest.errors.append(f"Could not read {self.metadata_file}: {e.strerror or e}")
            return manifest

        try:
            manifest.raw_front_matter = parse_front_matter(content)
        except FrontMatterError as e:
            manifest.errors.append(str(e))
            return manifest

        for name in self.required_fields:
            if not manifest.raw_front_matter.get(name, "").strip():
                manifest.errors.append(f"Front matter must include '{name}'")

        return manifest
