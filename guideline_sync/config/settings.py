"""
Guidelines Configuration — Where to mirror from, what to copy, what to check.

Values are layered, lowest first:

1. Model defaults
2. ``guidelines.yaml`` at the project root (or an explicit file)
3. ``GUIDELINES_*`` environment variables
4. CLI options (applied by the caller via ``with_overrides``)

## Environment Variables

- GUIDELINES_REPO_URL: upstream repository URL
- GUIDELINES_TARGET_DIR: local mirror directory
- GUIDELINES_BRANCH: branch to mirror (default: main)
- GUIDELINES_ARTIFACT_SOURCE: standalone file to copy ("" disables)
- GUIDELINES_ARTIFACT_DEST: directory the artifact is copied into
- GUIDELINES_SKILLS_DIR: skills root to validate
- GUIDELINES_SKILL_FILE: metadata file name inside each skill
- GUIDELINES_EXPECTED_SKILLS: how many skills must exist
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..mirror.syncer import MirrorRepository
from ..orchestrator import ArtifactTarget

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "guidelines.yaml"

ENV_VARS = {
    "repo_url": "GUIDELINES_REPO_URL",
    "target_dir": "GUIDELINES_TARGET_DIR",
    "branch": "GUIDELINES_BRANCH",
    "artifact_source": "GUIDELINES_ARTIFACT_SOURCE",
    "artifact_dest_dir": "GUIDELINES_ARTIFACT_DEST",
    "skills_dir": "GUIDELINES_SKILLS_DIR",
    "skill_file": "GUIDELINES_SKILL_FILE",
    "expected_skill_count": "GUIDELINES_EXPECTED_SKILLS",
}


class ConfigError(ValueError):
    """Configuration could not be loaded or is invalid."""


class GuidelinesConfig(BaseModel):
    """Effective configuration. Paths are relative to ``root`` until resolved."""

    model_config = ConfigDict(extra="forbid")

    root: Path = Field(default_factory=Path.cwd, exclude=True)

    repo_url: str = "https://github.com/codebar-ag/coding-guidelines.git"
    target_dir: Path = Path("guidelines")
    branch: str = "main"

    artifact_source: Optional[Path] = Path("guidelines/refactor.md")
    artifact_dest_dir: Path = Path(".cursor/commands")

    skills_dir: Path = Path("resources/boost/skills")
    skill_file: str = "SKILL.md"
    expected_skill_count: int = Field(default=36, ge=0)

    def resolve(self, path: Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.root / path

    def mirror_repository(self) -> MirrorRepository:
        return MirrorRepository(
            remote_url=self.repo_url,
            local_path=self.resolve(self.target_dir),
            default_branch=self.branch,
        )

    def artifact_target(self) -> Optional[ArtifactTarget]:
        if self.artifact_source is None:
            return None
        return ArtifactTarget(
            source=self.resolve(self.artifact_source),
            destination_dir=self.resolve(self.artifact_dest_dir),
        )

    def with_overrides(self, **overrides: Any) -> "GuidelinesConfig":
        """Copy with non-None overrides applied and re-validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        data = self.model_dump()
        data.update(changes)
        return _build(root=self.root, data=data, origin="command line")

    def to_display_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json")
        data["root"] = str(self.root)
        return data


def _build(root: Path, data: Dict[str, Any], origin: str) -> GuidelinesConfig:
    if "root" in data:
        raise ConfigError(f"'root' cannot be set from {origin}; use --root")
    try:
        return GuidelinesConfig(root=root, **data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration from {origin}: {e}") from e


def load_yaml_config(path: Path) -> Dict[str, Any]:
    """Load a YAML config file into a dict (empty file → empty dict)."""
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def env_overrides(environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Collect GUIDELINES_* variables that are set."""
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    for key, var in ENV_VARS.items():
        if var not in environ:
            continue
        value = environ[var]
        if key == "artifact_source" and not value.strip():
            values[key] = None  # explicit disable
        elif value.strip():
            values[key] = value.strip()

    return values


def load_config(
    root: Optional[Path] = None,
    config_file: Optional[Path] = None,
    environ: Optional[Dict[str, str]] = None,
) -> GuidelinesConfig:
    """
    Build the effective configuration.

    Args:
        root: Project root (default: current directory)
        config_file: Explicit YAML file; must exist if given
        environ: Environment mapping (default: os.environ)

    Raises:
        ConfigError: If the file is unreadable or a value is invalid
    """
    root = Path(root) if root else Path.cwd()
    data: Dict[str, Any] = {}

    if config_file is not None:
        path = Path(config_file)
        if not path.is_absolute():
            path = root / path
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        data.update(load_yaml_config(path))
        logger.debug(f"Loaded config from {path}")
    elif (root / CONFIG_FILENAME).is_file():
        data.update(load_yaml_config(root / CONFIG_FILENAME))
        logger.debug(f"Loaded config from {root / CONFIG_FILENAME}")

    data.update(env_overrides(environ))

    return _build(root=root, data=data, origin="config file/environment")
