"""
Shared CLI helpers.
"""

from __future__ import annotations

import click

from ..config.settings import ConfigError, GuidelinesConfig, load_config

EXIT_CONFIG_ERROR = 2


def get_config(ctx: click.Context, **overrides) -> GuidelinesConfig:
    """Load config for the group's root/config file, applying CLI overrides."""
    try:
        config = load_config(ctx.obj["root"], ctx.obj.get("config_file"))
        return config.with_overrides(**overrides)
    except ConfigError as e:
        click.secho(f"Configuration error: {e}", fg="red", err=True)
        ctx.exit(EXIT_CONFIG_ERROR)
