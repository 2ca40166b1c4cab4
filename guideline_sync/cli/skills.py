"""
CLI skills command — validate every SKILL.md under the skills directory.

Usage:
    guideline-sync validate-skills [--skills-dir DIR] [--expected-count N]
"""

from __future__ import annotations

import click

from .common import get_config


@click.command("validate-skills")
@click.option("--skills-dir", type=click.Path(), default=None, help="Skills root directory")
@click.option("--expected-count", type=int, default=None, help="Number of skills that must exist")
@click.pass_context
def validate_skills(ctx: click.Context, skills_dir: str | None, expected_count: int | None) -> None:
    """Check skill front matter and the skill count. Exits 1 on any error."""
    from ..skills.validator import ManifestValidator

    config = get_config(ctx, skills_dir=skills_dir, expected_skill_count=expected_count)

    validator = ManifestValidator(metadata_file=config.skill_file)
    report = validator.validate(config.resolve(config.skills_dir), config.expected_skill_count)

    if not report.ok:
        for line in report.error_lines():
            click.echo(f"ERROR: {line}", err=True)
        ctx.exit(1)

    click.secho(f"✓ All {report.manifests_checked} skills validated successfully.", fg="green")
