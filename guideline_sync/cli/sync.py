"""
CLI sync commands — mirror the guidelines repo and copy the command file.

Usage:
    guideline-sync sync [--repo-url URL] [--target-dir DIR] [--branch NAME] [--no-artifact]
    guideline-sync sync-command
"""

from __future__ import annotations

import click

from .common import get_config


@click.command("sync")
@click.option("--repo-url", default=None, help="Upstream repository URL")
@click.option("--target-dir", type=click.Path(), default=None, help="Local mirror directory")
@click.option("--branch", default=None, help="Branch to mirror")
@click.option("--no-artifact", is_flag=True, help="Skip the standalone artifact copy")
@click.pass_context
def sync(
    ctx: click.Context,
    repo_url: str | None,
    target_dir: str | None,
    branch: str | None,
    no_artifact: bool,
) -> None:
    """Clone or update the guidelines mirror, then sync the command file.

    Never fails on network problems; exits 1 only if the command file
    could not be written.
    """
    from ..orchestrator import SyncOrchestrator
    from ..sink import ClickSink

    config = get_config(ctx, repo_url=repo_url, target_dir=target_dir, branch=branch)

    orchestrator = SyncOrchestrator(sink=ClickSink())
    artifact = None if no_artifact else config.artifact_target()
    result = orchestrator.refresh(config.mirror_repository(), artifact)

    if not result.ok:
        click.secho("Could not write the command file.", fg="red", err=True)
        ctx.exit(1)


@click.command("sync-command")
@click.pass_context
def sync_command(ctx: click.Context) -> None:
    """Sync only the standalone command file into the project."""
    from ..artifacts.file_sync import DigestFileSynchronizer
    from ..sink import ClickSink

    config = get_config(ctx)
    target = config.artifact_target()
    if target is None:
        click.secho("No artifact source configured.", fg="yellow")
        ctx.exit(1)

    result = DigestFileSynchronizer(sink=ClickSink()).sync(target.source, target.destination_dir)

    if result.ok:
        click.secho(
            f"Command file is ready at {target.destination_dir / target.source.name}",
            fg="green",
        )
        return

    click.secho("Could not sync command file.", fg="yellow")
    ctx.exit(1)
