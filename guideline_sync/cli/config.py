"""
CLI config command — show the effective configuration.

Usage:
    guideline-sync show-config [--json]
"""

from __future__ import annotations

import click

from .common import get_config


@click.command("show-config")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show_config(ctx: click.Context, as_json: bool) -> None:
    """Show configuration after file, environment, and defaults are merged."""
    import json as json_lib

    config = get_config(ctx)
    data = config.to_display_dict()

    if as_json:
        click.echo(json_lib.dumps(data, indent=2))
        return

    click.echo("\n📋 Guidelines Configuration\n")
    for key, value in data.items():
        click.echo(f"  {key + ':':<22} {value if value is not None else '(disabled)'}")
    click.echo()
