"""
Guideline Sync — CLI Entry Point

Usage:
    guideline-sync sync
    guideline-sync sync-command
    guideline-sync validate-skills [--expected-count N]
    guideline-sync show-config [--json]

    python -m guideline_sync.main <command>
"""

from __future__ import annotations

# Load .env before anything reads GUIDELINES_* variables
from pathlib import Path
from dotenv import load_dotenv

_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

import click

from . import __version__
from .cli.config import show_config
from .cli.skills import validate_skills
from .cli.sync import sync, sync_command
from .logging_config import setup_logging

setup_logging()


@click.group()
@click.version_option(__version__, prog_name="guideline-sync")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: guidelines.yaml in the root)",
)
@click.pass_context
def cli(ctx: click.Context, root: Path | None, config_file: Path | None) -> None:
    """Guideline Sync — mirror shared guidelines and validate skills."""
    ctx.ensure_object(dict)
    ctx.obj["root"] = root or Path.cwd()
    ctx.obj["config_file"] = config_file


cli.add_command(sync)
cli.add_command(sync_command)
cli.add_command(validate_skills)
cli.add_command(show_config)


if __name__ == "__main__":
    cli()
